"""Holds the text encoding setting shared by the utext operations."""

import codecs
import logging

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import EncodingError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"


class TextConfig(BaseModel):
    """
    Settings read by every length, search and case operation.

    The model validates on assignment, so ``config.encoding = "..."`` is
    checked the same way as construction.
    """

    model_config = ConfigDict(validate_assignment=True)

    encoding: str = DEFAULT_ENCODING

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        """Reject encoding names the codec registry does not know."""
        try:
            codecs.lookup(value)
        except LookupError as e:
            msg = f"Unknown text encoding: '{value}'"
            raise ValueError(msg) from e
        return value

    def decode(self, value: str | bytes) -> str:
        """Return ``value`` as text, decoding bytes with the current encoding."""
        if isinstance(value, bytes):
            return value.decode(self.encoding)
        return value


# Shared by every TextOps created without an explicit config.
_default_config = TextConfig()


def get_default_config() -> TextConfig:
    """Return the process-wide configuration instance."""
    return _default_config


def get_encoding() -> str:
    """Return the encoding currently used by the default operations."""
    return _default_config.encoding


def set_encoding(encoding: str) -> None:
    """
    Change the encoding used by the default operations.

    The new value applies to every call made after this one returns.
    Concurrent writers are not synchronised; the last write wins.

    Args:
        encoding: A codec name known to :func:`codecs.lookup`.

    Raises:
        EncodingError: If the codec is unknown.

    """
    try:
        _default_config.encoding = encoding
    except ValidationError as e:
        msg = f"Invalid encoding setting: {e}"
        raise EncodingError(msg) from e
    logger.debug("Default text encoding set to '%s'", encoding)
