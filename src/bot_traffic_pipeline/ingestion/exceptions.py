"""
Custom exceptions for the bot traffic pipeline.

Provides specialized exception classes for handling configuration
and extractor lookup problems during log analysis.
"""


class AnalysisError(Exception):
    """
    Base exception for all analysis-related errors.

    All other pipeline exceptions inherit from this class,
    allowing for broad exception catching when needed.
    """

    pass


class ConfigurationError(AnalysisError):
    """
    Raised when configuration cannot be loaded or is invalid.

    Attributes:
        config_path: Path of the offending configuration file (optional)
        reason: Detailed explanation of the failure (optional)
    """

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        reason: str | None = None,
    ):
        self.config_path = config_path
        self.reason = reason
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.config_path:
            parts.append(f"path='{self.config_path}'")
        if self.reason:
            parts.append(f"reason: {self.reason}")
        return " - ".join(parts)


class PatternConfigError(ConfigurationError):
    """
    Raised when a bot or category pattern is not a valid regular expression.

    Attributes:
        pattern: The pattern that failed to compile
    """

    def __init__(self, pattern: str, reason: str | None = None):
        self.pattern = pattern
        super().__init__(f"Invalid pattern: {pattern!r}", reason=reason)


class ExtractorNotFoundError(AnalysisError):
    """
    Raised when no field extractor is registered for a log format.

    Attributes:
        format_name: The name of the unsupported format
        available_formats: List of registered format names
    """

    def __init__(
        self,
        format_name: str,
        available_formats: list[str] | None = None,
    ):
        self.format_name = format_name
        self.available_formats = available_formats or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with available formats."""
        if self.available_formats:
            available = ", ".join(sorted(self.available_formats))
            return (
                f"No extractor for log format: '{self.format_name}'. "
                f"Available formats: {available}"
            )
        return (
            f"No extractor for log format: '{self.format_name}'. "
            "No extractors registered."
        )
