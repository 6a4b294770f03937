"""
Stateless, Unicode-aware string operations.

Every operation counts and slices in codepoints. Arguments may be ``str``,
``bytes`` or :class:`~utext.text.UText`; bytes are decoded with the encoding
that is current when the call is made, so a change through
:func:`utext.set_encoding` applies to the very next call.

Absence is never an error here. A search that finds nothing returns the
subject unchanged; only malformed regular expressions raise
(:class:`~utext.errors.PatternError`).

The operations are methods of :class:`TextOps`. The module also exposes them
as plain functions bound to :data:`default_ops`::

    >>> from utext import ops
    >>> ops.after("hello::world", "::")
    'world'
"""

import logging
import unicodedata
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Union

import regex

from .config import TextConfig, get_default_config
from .errors import PatternError
from .patterns import compile_glob, compile_pattern

if TYPE_CHECKING:
    from .text import UText

logger = logging.getLogger(__name__)

TextLike = Union[str, bytes, "UText"]
Needles = TextLike | Iterable[TextLike] | None
RegexLike = str | regex.Pattern

# East Asian Width classes rendered as two terminal columns.
_WIDE_CLASSES = frozenset({"W", "F"})

# A word for title casing: a run of word characters, apostrophes allowed inside.
_TITLE_WORD = regex.compile(r"\w+(?:['’]\w+)*")


class TextOps:
    """
    Text operations bound to one :class:`TextConfig`.

    Without an explicit config the instance follows the shared process-wide
    configuration, which is what :func:`utext.set_encoding` changes.
    """

    def __init__(self, config: TextConfig | None = None) -> None:
        """
        Initialize the operations.

        Args:
            config: The settings to read on every call. Defaults to the
                shared configuration.

        """
        self.config = get_default_config() if config is None else config

    @property
    def encoding(self) -> str:
        """The encoding used to decode bytes arguments."""
        return self.config.encoding

    def _text(self, value: TextLike) -> str:
        if isinstance(value, (str, bytes)):
            return self.config.decode(value)
        return str(value)

    def _needles(self, needles: Needles) -> list[str]:
        if needles is None:
            return []
        if isinstance(needles, (str, bytes)) or not isinstance(needles, Iterable):
            return [self._text(needles)]
        return [self._text(needle) for needle in needles]

    @staticmethod
    def _find(subject: str, search: str) -> int | None:
        position = subject.find(search)
        return None if position < 0 else position

    @staticmethod
    def _rfind(subject: str, search: str) -> int | None:
        position = subject.rfind(search)
        return None if position < 0 else position

    def of(self, value: TextLike = "") -> "UText":
        """Wrap ``value`` in a UText bound to these operations."""
        from .text import UText

        return UText(value, ops=self)

    # Search and extraction

    def after(self, subject: TextLike, search: TextLike) -> str:
        """Return the remainder of ``subject`` after the first ``search``."""
        subject, search = self._text(subject), self._text(search)
        if not search:
            return subject
        position = self._find(subject, search)
        if position is None:
            return subject
        return subject[position + len(search) :]

    def after_last(self, subject: TextLike, search: TextLike) -> str:
        """Return the remainder of ``subject`` after the last ``search``."""
        subject, search = self._text(subject), self._text(search)
        if not search:
            return subject
        position = self._rfind(subject, search)
        if position is None:
            return subject
        return subject[position + len(search) :]

    def before(self, subject: TextLike, search: TextLike) -> str:
        """Return the portion of ``subject`` before the first ``search``."""
        subject, search = self._text(subject), self._text(search)
        if not search:
            return subject
        position = self._find(subject, search)
        if position is None:
            return subject
        return subject[:position]

    def before_last(self, subject: TextLike, search: TextLike) -> str:
        """Return the portion of ``subject`` before the last ``search``."""
        subject, search = self._text(subject), self._text(search)
        if not search:
            return subject
        position = self._rfind(subject, search)
        if position is None:
            return subject
        return subject[:position]

    def between(self, subject: TextLike, from_: TextLike, to: TextLike) -> str:
        """
        Return the portion of ``subject`` between ``from_`` and ``to``.

        The span starts after the FIRST ``from_`` and ends before the LAST
        ``to``, so ``between("[a][b]", "[", "]")`` is ``"a][b"``.
        """
        subject, from_, to = self._text(subject), self._text(from_), self._text(to)
        if not from_ or not to:
            return subject
        return self.before_last(self.after(subject, from_), to)

    # Membership

    def contains(self, haystack: TextLike, needles: Needles) -> bool:
        """Return True if any non-empty needle occurs in ``haystack``."""
        haystack = self._text(haystack)
        return any(needle and needle in haystack for needle in self._needles(needles))

    def contains_all(self, haystack: TextLike, needles: Needles) -> bool:
        """Return True if every needle occurs in ``haystack``; empty needles always count."""
        haystack = self._text(haystack)
        return all(not needle or self.contains(haystack, needle) for needle in self._needles(needles))

    def starts_with(self, haystack: TextLike, needles: Needles) -> bool:
        """Return True if ``haystack`` begins with any non-empty needle."""
        haystack = self._text(haystack)
        return any(needle and haystack.startswith(needle) for needle in self._needles(needles))

    def ends_with(self, haystack: TextLike, needles: Needles) -> bool:
        """Return True if ``haystack`` ends with any non-empty needle."""
        haystack = self._text(haystack)
        return any(needle and haystack.endswith(needle) for needle in self._needles(needles))

    # Pattern matching

    def is_(self, patterns: Needles, value: TextLike) -> bool:
        """
        Determine if ``value`` matches any of the glob ``patterns``.

        ``*`` matches any run of characters, everything else is literal. The
        whole value must match, case-sensitively.

        Examples:
            >>> TextOps().is_("foo/*", "foo/bar/baz")
            True
            >>> TextOps().is_("foo/*", "foobar")
            False

        """
        value = self._text(value)
        for pattern in self._needles(patterns):
            if value == pattern:
                return True
            if compile_glob(pattern).match(value) is not None:
                return True
        return False

    def is_match(self, pattern: RegexLike, text: TextLike, flags: int = 0) -> bool:
        """Return True if the regular expression matches anywhere in ``text``."""
        return compile_pattern(pattern, flags).search(self._text(text)) is not None

    # Case and length

    def length(self, value: TextLike) -> int:
        """Return the number of codepoints in ``value``."""
        return len(self._text(value))

    def width(self, value: TextLike) -> int:
        """Return the display width of ``value``; wide and fullwidth characters count as two."""
        return sum(_char_width(char) for char in self._text(value))

    def lower(self, value: TextLike) -> str:
        """Convert ``value`` to lower case."""
        return self._text(value).lower()

    def upper(self, value: TextLike) -> str:
        """Convert ``value`` to upper case."""
        return self._text(value).upper()

    def title(self, value: TextLike) -> str:
        """Capitalize the first letter of each word and lower-case the rest."""
        return _TITLE_WORD.sub(lambda m: m[0][:1].title() + m[0][1:].lower(), self._text(value))

    # Truncation

    def limit(self, value: TextLike, limit: int = 100, end: TextLike | None = "...") -> str:
        """
        Limit ``value`` to ``limit`` display columns.

        Text that already fits is returned unchanged. Otherwise it is cut to
        fit, trailing whitespace is removed and ``end`` is appended.
        """
        value = self._text(value)
        if self.width(value) <= limit:
            return value
        return _truncate_to_width(value, limit).rstrip() + self._text(end or "")

    def words(self, value: TextLike, words: int = 100, end: TextLike | None = "...") -> str:
        """
        Limit ``value`` to its first ``words`` whitespace-delimited words.

        Examples:
            >>> TextOps().words("The quick brown fox", 2)
            'The quick...'

        """
        value = self._text(value)
        if words < 1:
            return value
        found = compile_pattern(rf"^\s*+(?:\S++\s*+){{1,{words}}}").match(value)
        if found is None or len(found[0]) == len(value):
            return value
        return found[0].rstrip() + self._text(end or "")

    # Replacement

    def replace(
        self,
        search: TextLike | Iterable[TextLike],
        replace: TextLike | Iterable[TextLike],
        subject: TextLike,
    ) -> str:
        """
        Replace every occurrence of each ``search`` value in ``subject``.

        ``search`` may be a single value or a list. With a list of searches,
        ``replace`` may be one value used for all of them, or a list paired
        with the searches in order (missing replacements are empty). The
        pairs are applied one after another. Empty searches are ignored.
        """
        subject = self._text(subject)
        searches = self._needles(search)
        if isinstance(replace, (str, bytes)) or not isinstance(replace, Iterable):
            replacements = [self._text(replace)] * len(searches)
        elif isinstance(search, (str, bytes)) or not isinstance(search, Iterable):
            msg = "A list of replacements requires a list of search values."
            raise TypeError(msg)
        else:
            replacements = self._needles(replace)
            replacements += [""] * (len(searches) - len(replacements))

        for needle, replacement in zip(searches, replacements):
            if needle:
                subject = subject.replace(needle, replacement)
        return subject

    def replace_array(
        self,
        search: TextLike,
        replacements: Iterable[TextLike] | Mapping[object, TextLike],
        subject: TextLike,
    ) -> str:
        """
        Replace each ``search`` in ``subject`` with the next replacement in order.

        When the replacements run out, the remaining occurrences keep the
        original ``search`` text.

        Examples:
            >>> TextOps().replace_array("?", ["a", "b"], "?-?-?")
            'a-b-?'

        """
        search, subject = self._text(search), self._text(subject)
        if not search:
            return subject
        if isinstance(replacements, Mapping):
            replacements = replacements.values()

        segments = subject.split(search)
        pending = iter(self._needles(replacements))
        pieces = [segments[0]]
        exhausted = 0
        for segment in segments[1:]:
            replacement = next(pending, None)
            if replacement is None:
                replacement = search
                exhausted += 1
            pieces.append(replacement)
            pieces.append(segment)

        if exhausted:
            logger.debug("Ran out of replacements for '%s'; kept %d occurrence(s)", search, exhausted)
        return "".join(pieces)

    def replace_first(self, search: TextLike, replace: TextLike, subject: TextLike) -> str:
        """Replace the first occurrence of ``search`` in ``subject``."""
        search, replace, subject = self._text(search), self._text(replace), self._text(subject)
        if not search:
            return subject
        position = self._find(subject, search)
        if position is None:
            return subject
        return subject[:position] + replace + subject[position + len(search) :]

    def replace_last(self, search: TextLike, replace: TextLike, subject: TextLike) -> str:
        """Replace the last occurrence of ``search`` in ``subject``."""
        search, replace, subject = self._text(search), self._text(replace), self._text(subject)
        if not search:
            return subject
        position = self._rfind(subject, search)
        if position is None:
            return subject
        return subject[:position] + replace + subject[position + len(search) :]

    def start(self, value: TextLike, prefix: TextLike) -> str:
        """Begin ``value`` with exactly one instance of ``prefix``."""
        value, prefix = self._text(value), self._text(prefix)
        if not prefix:
            return value
        leading = compile_pattern(rf"\A(?:{regex.escape(prefix)})+")
        return prefix + leading.sub("", value, count=1)

    def finish(self, value: TextLike, cap: TextLike) -> str:
        """End ``value`` with exactly one instance of ``cap``."""
        value, cap = self._text(value), self._text(cap)
        if not cap:
            return value
        trailing = compile_pattern(rf"(?:{regex.escape(cap)})+\Z")
        return trailing.sub("", value, count=1) + cap

    # Substrings

    def substr(self, string: TextLike, start: int, length: int | None = None) -> str:
        """
        Return the codepoints of ``string`` selected by ``start`` and ``length``.

        A negative ``start`` counts from the end. ``length=None`` runs to the
        end, a negative ``length`` stops that many codepoints before the end.
        Out-of-range positions are clamped; an empty selection gives ``""``.
        """
        text = self._text(string)
        size = len(text)
        if start < 0:
            start = max(size + start, 0)
        if length is None:
            end = size
        elif length < 0:
            end = size + length
        else:
            end = start + length
        return text[start:end] if end > start else ""

    def trim(self, value: TextLike, characters: TextLike | None = None) -> str:
        """Strip whitespace, or the given set of ``characters``, from both ends."""
        value = self._text(value)
        if characters is None:
            return value.strip()
        return value.strip(self._text(characters))

    # Regular expressions

    def match(self, pattern: RegexLike, subject: TextLike, flags: int = 0) -> str:
        """
        Return the first capture group of the first match.

        Falls back to the whole match when the pattern has no (participating)
        group, and to ``""`` when nothing matches.
        """
        found = compile_pattern(pattern, flags).search(self._text(subject))
        if found is None:
            return ""
        if found.re.groups and found[1] is not None:
            return found[1]
        return found[0]

    def replace_matches(
        self,
        pattern: RegexLike,
        replacement: TextLike,
        subject: TextLike,
        limit: int = -1,
        flags: int = 0,
    ) -> str:
        r"""
        Replace matches of ``pattern`` using a substitution template.

        The template follows ``regex`` syntax (``\1``, ``\g<name>``).
        ``limit`` caps the number of substitutions; ``-1`` (or any value
        below 1) replaces every match.
        """
        compiled = compile_pattern(pattern, flags)
        try:
            return compiled.sub(self._text(replacement), self._text(subject), count=max(limit, 0))
        except (regex.error, IndexError) as e:
            msg = f"Invalid replacement template for pattern '{compiled.pattern}': {e}"
            raise PatternError(msg, pattern=compiled.pattern) from e

    def replace_matches_using(
        self,
        pattern: RegexLike,
        callback: Callable[[regex.Match], str],
        subject: TextLike,
        limit: int = -1,
        flags: int = 0,
    ) -> str:
        """Replace matches of ``pattern`` with whatever ``callback`` returns for each match."""
        compiled = compile_pattern(pattern, flags)
        return compiled.sub(callback, self._text(subject), count=max(limit, 0))


def _char_width(char: str) -> int:
    return 2 if unicodedata.east_asian_width(char) in _WIDE_CLASSES else 1


def _truncate_to_width(value: str, width: int) -> str:
    """Return the longest prefix of ``value`` whose display width fits in ``width``."""
    used = 0
    for index, char in enumerate(value):
        used += _char_width(char)
        if used > width:
            return value[:index]
    return value


default_ops = TextOps()

after = default_ops.after
after_last = default_ops.after_last
before = default_ops.before
before_last = default_ops.before_last
between = default_ops.between
contains = default_ops.contains
contains_all = default_ops.contains_all
ends_with = default_ops.ends_with
finish = default_ops.finish
is_ = default_ops.is_
is_match = default_ops.is_match
length = default_ops.length
limit = default_ops.limit
lower = default_ops.lower
match = default_ops.match
of = default_ops.of
replace = default_ops.replace
replace_array = default_ops.replace_array
replace_first = default_ops.replace_first
replace_last = default_ops.replace_last
replace_matches = default_ops.replace_matches
replace_matches_using = default_ops.replace_matches_using
start = default_ops.start
starts_with = default_ops.starts_with
substr = default_ops.substr
title = default_ops.title
trim = default_ops.trim
upper = default_ops.upper
width = default_ops.width
words = default_ops.words
