"""
Custom exceptions for filespec-matcher.

Illegal patterns are never reported through exceptions; they are a
classification flag on the compiled pattern. The exceptions below cover
the remaining failure modes: bad configuration, paths that exceed the
configured length limit, and enumeration callbacks that break their
contract.
"""

from typing import Optional


class FileMatcherError(Exception):
    """
    Base exception for all filespec-matcher errors.

    Args:
        message: The error message
        details: Additional error details (optional)

    Example:
        >>> try:
        ...     raise FileMatcherError("Something went wrong")
        ... except FileMatcherError as e:
        ...     logger.error(f"Error: {e}")
    """

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class ConfigurationError(FileMatcherError):
    """
    Raised when matcher settings cannot be loaded or saved.

    This includes:
    - Missing or unreadable settings file
    - Invalid YAML syntax
    - Values rejected by validation

    Example:
        >>> raise ConfigurationError(
        ...     "Invalid configuration",
        ...     "directory_separator must be '\\\\' or '/'"
        ... )
    """

    pass


class PathTooLongError(FileMatcherError):
    """
    Raised when a directory path exceeds the configured maximum length.

    `get_files` catches this and degrades to returning the literal
    filespec, the same way an illegal pattern is handled.
    """

    pass


class ShortPathResolutionError(FileMatcherError):
    """
    Raised when an enumeration callback returns more than one entry for
    a short-name probe. A short name identifies at most one entry in a
    directory, so this indicates a broken callback.

    Example:
        >>> raise ShortPathResolutionError(
        ...     "Ambiguous short name 'LONGDI~1'",
        ...     "2 entries found under 'D:\\\\'"
        ... )
    """

    pass
