"""Utility functions for bot traffic pipeline."""

from .bot_classifier import BotClassifier, compile_patterns, is_usable_user_agent

__all__ = [
    # Bot classification
    "BotClassifier",
    "compile_patterns",
    "is_usable_user_agent",
]
