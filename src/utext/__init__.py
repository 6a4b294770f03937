"""utext: Unicode-aware string operations and a chainable text value."""

import importlib.metadata

from .config import TextConfig, get_encoding, set_encoding
from .errors import EncodingError, PatternError, UTextError
from .ops import TextOps, default_ops
from .text import UText, UTextJSONEncoder


def _get_version() -> str:
    """
    Retrieve the package version from metadata.

    Returns:
        The version string, or a development version if not installed.

    """
    try:
        return importlib.metadata.version("utext")
    except importlib.metadata.PackageNotFoundError:
        # Running from a source checkout
        return "0.0.0-dev"


__version__ = _get_version()


def of(value: str | bytes = "") -> UText:
    """Wrap ``value`` in a UText bound to the default operations."""
    return default_ops.of(value)


__all__ = [
    "EncodingError",
    "PatternError",
    "TextConfig",
    "TextOps",
    "UText",
    "UTextError",
    "UTextJSONEncoder",
    "__version__",
    "default_ops",
    "get_encoding",
    "of",
    "set_encoding",
]
