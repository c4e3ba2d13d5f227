"""Custom exceptions for the registry usage reporter."""


class RegistryUsageError(Exception):
    """Base exception for all registry usage errors."""

    pass


class ConfigurationError(RegistryUsageError):
    """Raised when required options are missing or cannot be parsed."""

    pass


class PatternCompileError(RegistryUsageError):
    """Raised when an include/exclude filter is not a valid regular expression."""

    def __init__(self, option: str, pattern: str, reason: str) -> None:
        self.option = option
        self.pattern = pattern
        super().__init__(f"Invalid {option} pattern {pattern!r}: {reason}")


class SourceError(RegistryUsageError):
    """Raised when the image listing fails or cannot be authenticated."""

    pass
