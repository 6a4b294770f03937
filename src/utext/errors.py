"""Exception types raised by utext."""


class UTextError(Exception):
    """Base class for all utext errors."""


class PatternError(UTextError, ValueError):
    """A regular expression could not be compiled or applied."""

    def __init__(self, message: str, pattern: str | None = None) -> None:
        """
        Initialize the error.

        Args:
            message: The human-readable description of the failure.
            pattern: The offending pattern source, when known.

        """
        super().__init__(message)
        self.pattern = pattern


class EncodingError(UTextError, ValueError):
    """An unknown text encoding name was configured."""
