"""
Extractor registry for log formats.

Provides registration and lookup of user-agent extractor implementations
keyed by log format.
"""

import logging
from typing import Type, Union

from .base import LogFormat, UserAgentExtractor
from .exceptions import ExtractorNotFoundError

logger = logging.getLogger(__name__)

FormatKey = Union[LogFormat, str]


def _format_name(log_format: FormatKey) -> str:
    if isinstance(log_format, LogFormat):
        return log_format.value
    return str(log_format).lower()


class ExtractorRegistry:
    """
    Registry for user-agent extractors.

    Supporting a new log format means registering its extractor here and
    adding a detection rule; nothing else changes.

    Usage:
        # Register using decorator
        @ExtractorRegistry.register(LogFormat.APACHE)
        class ApacheUserAgentExtractor(UserAgentExtractor):
            ...

        # Or register manually
        ExtractorRegistry.register_extractor(LogFormat.IIS, W3CUserAgentExtractor)

        # Get extractor instance
        extractor = ExtractorRegistry.get_extractor(LogFormat.IIS)
    """

    _extractors: dict[str, Type[UserAgentExtractor]] = {}

    @classmethod
    def register(cls, log_format: FormatKey):
        """
        Decorator to register an extractor class.

        Args:
            log_format: Log format handled by the decorated class

        Returns:
            Decorator function
        """

        def decorator(
            extractor_class: Type[UserAgentExtractor],
        ) -> Type[UserAgentExtractor]:
            cls.register_extractor(log_format, extractor_class)
            return extractor_class

        return decorator

    @classmethod
    def register_extractor(
        cls, log_format: FormatKey, extractor_class: Type[UserAgentExtractor]
    ) -> None:
        """
        Register an extractor class for a log format.

        Raises:
            TypeError: If extractor_class doesn't inherit from UserAgentExtractor
        """
        if not issubclass(extractor_class, UserAgentExtractor):
            raise TypeError(
                f"Extractor class must inherit from UserAgentExtractor, "
                f"got {extractor_class.__name__}"
            )

        name = _format_name(log_format)

        if name in cls._extractors and cls._extractors[name] is not extractor_class:
            logger.warning(f"Overwriting existing extractor for format '{name}'")

        cls._extractors[name] = extractor_class
        logger.debug(f"Registered user-agent extractor: {name}")

    @classmethod
    def get_extractor(cls, log_format: FormatKey) -> UserAgentExtractor:
        """
        Get an extractor instance by log format.

        Raises:
            ExtractorNotFoundError: If no extractor is registered for the format
        """
        return cls.get_extractor_class(log_format)()

    @classmethod
    def get_extractor_class(cls, log_format: FormatKey) -> Type[UserAgentExtractor]:
        """
        Get an extractor class by log format (without instantiation).

        Raises:
            ExtractorNotFoundError: If no extractor is registered for the format
        """
        name = _format_name(log_format)

        if name not in cls._extractors:
            raise ExtractorNotFoundError(
                format_name=name,
                available_formats=list(cls._extractors.keys()),
            )

        return cls._extractors[name]

    @classmethod
    def list_formats(cls) -> list[str]:
        """Sorted list of registered format names."""
        return sorted(cls._extractors.keys())

    @classmethod
    def is_format_registered(cls, log_format: FormatKey) -> bool:
        return _format_name(log_format) in cls._extractors

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered extractors.

        Primarily used for testing to reset registry state.
        """
        cls._extractors.clear()
        logger.debug("Cleared extractor registry")


# =============================================================================
# Convenience Functions
# =============================================================================


def get_extractor(log_format: FormatKey) -> UserAgentExtractor:
    """
    Get an extractor instance by log format.

    Convenience function wrapping ExtractorRegistry.get_extractor().
    """
    return ExtractorRegistry.get_extractor(log_format)


def register_extractor(
    log_format: FormatKey, extractor_class: Type[UserAgentExtractor]
) -> None:
    """Convenience function wrapping ExtractorRegistry.register_extractor()."""
    ExtractorRegistry.register_extractor(log_format, extractor_class)


def list_formats() -> list[str]:
    """Convenience function wrapping ExtractorRegistry.list_formats()."""
    return ExtractorRegistry.list_formats()
