"""
Pattern compilation for utext.

Two pattern languages are handled here:

- Glob patterns, where ``*`` matches any run of characters (including none)
  and every other character is literal. They are translated to regular
  expressions in two stages: escape the metacharacters, then turn each
  escaped ``*`` back into ``.*``. The result is anchored at both ends.
- Regular expressions in the syntax of the ``regex`` module, compiled as
  given.

Compiled patterns are cached by source string, so repeated calls with the
same pattern skip compilation.
"""

import functools
import logging

import regex

from .errors import PatternError

logger = logging.getLogger(__name__)

_CACHE_SIZE = 512

# regex.escape() turns "*" into this token.
_ESCAPED_WILDCARD = r"\*"


def escape_glob(pattern: str) -> str:
    """Escape every regex metacharacter in ``pattern``."""
    return regex.escape(pattern, special_only=True)


def translate_glob(pattern: str) -> str:
    """
    Translate a glob pattern into an anchored regular expression source.

    Examples:
        >>> translate_glob("library/*")
        '^library/.*\\\\Z'
        >>> translate_glob("a.b")
        '^a\\\\.b\\\\Z'

    """
    body = escape_glob(pattern).replace(_ESCAPED_WILDCARD, ".*")
    return f"^{body}\\Z"


@functools.lru_cache(maxsize=_CACHE_SIZE)
def compile_glob(pattern: str) -> regex.Pattern:
    """Compile a glob pattern; matching is case-sensitive and not line-based."""
    source = translate_glob(pattern)
    logger.debug("Translated glob '%s' to '%s'", pattern, source)
    return regex.compile(source)


@functools.lru_cache(maxsize=_CACHE_SIZE)
def _compile_source(source: str, flags: int) -> regex.Pattern:
    logger.debug("Compiling pattern '%s' (flags=%d)", source, flags)
    try:
        return regex.compile(source, flags)
    except regex.error as e:
        msg = f"Invalid regex pattern '{source}': {e}"
        raise PatternError(msg, pattern=source) from e


def compile_pattern(pattern: str | regex.Pattern, flags: int = 0) -> regex.Pattern:
    """
    Return a compiled regular expression for ``pattern``.

    Args:
        pattern: A pattern source string, or an already compiled pattern.
        flags: ``regex`` flags applied when compiling a source string.

    Raises:
        PatternError: If the pattern does not compile.
        ValueError: If ``flags`` are given with an already compiled pattern.

    """
    if isinstance(pattern, regex.Pattern):
        if flags:
            msg = "Cannot apply flags to an already compiled pattern."
            raise ValueError(msg)
        return pattern
    return _compile_source(pattern, flags)


def clear_caches() -> None:
    """Drop every cached compiled pattern."""
    compile_glob.cache_clear()
    _compile_source.cache_clear()
