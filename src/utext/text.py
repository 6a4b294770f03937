"""
The chainable, immutable text value.

A :class:`UText` holds one string and exposes the operations of
:class:`~utext.ops.TextOps` as methods. Methods producing text return a new
UText, so calls chain::

    >>> UText("  hello::world  ").trim().after("::").upper()
    UText(string='WORLD')

Predicates and measurements return plain ``bool``/``int``/``list`` values.
"""

import json
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import regex
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from .ops import Needles, RegexLike, TextLike, TextOps, default_ops


class UText:
    """
    An immutable wrapper around one text value.

    Two instances holding the same text are interchangeable: they compare
    equal and hash alike. A UText also compares equal to the plain ``str``
    it wraps.
    """

    __slots__ = ("_ops", "_value")

    def __init__(self, value: "TextLike | UText" = "", ops: TextOps | None = None) -> None:
        """
        Create a new text value.

        Args:
            value: The text to wrap. Bytes are decoded with the encoding of ``ops``.
            ops: The operations to delegate to. Defaults to the shared operations.

        """
        ops = default_ops if ops is None else ops
        if isinstance(value, UText):
            value = value._value
        object.__setattr__(self, "_ops", ops)
        object.__setattr__(self, "_value", ops.config.decode(value))

    def __setattr__(self, name: str, value: object) -> None:
        """Reject attribute assignment."""
        msg = f"UText is immutable; cannot set '{name}'"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> None:
        """Reject attribute deletion."""
        msg = f"UText is immutable; cannot delete '{name}'"
        raise AttributeError(msg)

    def _new(self, value: str) -> "UText":
        return UText(value, ops=self._ops)

    def _fragment(self, value: "TextLike | UText") -> str:
        if isinstance(value, UText):
            return value._value
        return self._ops.config.decode(value)

    @property
    def value(self) -> str:
        """The wrapped text."""
        return self._value

    # Search and extraction

    def after(self, search: TextLike) -> "UText":
        """Return the remainder after the first occurrence of ``search``."""
        return self._new(self._ops.after(self._value, search))

    def after_last(self, search: TextLike) -> "UText":
        """Return the remainder after the last occurrence of ``search``."""
        return self._new(self._ops.after_last(self._value, search))

    def before(self, search: TextLike) -> "UText":
        """Return the portion before the first occurrence of ``search``."""
        return self._new(self._ops.before(self._value, search))

    def before_last(self, search: TextLike) -> "UText":
        """Return the portion before the last occurrence of ``search``."""
        return self._new(self._ops.before_last(self._value, search))

    def between(self, from_: TextLike, to: TextLike) -> "UText":
        """Return the portion after the first ``from_`` and before the last ``to``."""
        return self._new(self._ops.between(self._value, from_, to))

    def contains(self, needles: Needles) -> bool:
        return self._ops.contains(self._value, needles)

    def contains_all(self, needles: Needles) -> bool:
        return self._ops.contains_all(self._value, needles)

    def starts_with(self, needles: Needles) -> bool:
        return self._ops.starts_with(self._value, needles)

    def ends_with(self, needles: Needles) -> bool:
        return self._ops.ends_with(self._value, needles)

    def exactly(self, value: "TextLike | UText") -> bool:
        """Determine if the text is exactly ``value``, without any case folding."""
        return self._value == self._fragment(value)

    def is_(self, patterns: Needles) -> bool:
        """Determine if the text matches any of the glob ``patterns``."""
        return self._ops.is_(patterns, self._value)

    def is_match(self, pattern: RegexLike, flags: int = 0) -> bool:
        return self._ops.is_match(pattern, self._value, flags)

    def is_empty(self) -> bool:
        """Determine if the text has no codepoints."""
        return not self._value

    def is_not_empty(self) -> bool:
        return not self.is_empty()

    # Case and length

    def length(self) -> int:
        return self._ops.length(self._value)

    def width(self) -> int:
        return self._ops.width(self._value)

    def lower(self) -> "UText":
        return self._new(self._ops.lower(self._value))

    def upper(self) -> "UText":
        return self._new(self._ops.upper(self._value))

    def title(self) -> "UText":
        return self._new(self._ops.title(self._value))

    # Truncation

    def limit(self, limit: int = 100, end: TextLike | None = "...") -> "UText":
        """Limit the text to ``limit`` display columns, appending ``end`` when cut."""
        return self._new(self._ops.limit(self._value, limit, end))

    def words(self, words: int = 100, end: TextLike | None = "...") -> "UText":
        """Limit the text to ``words`` words, appending ``end`` when cut."""
        return self._new(self._ops.words(self._value, words, end))

    # Composition

    def append(self, *values: "TextLike | UText") -> "UText":
        """Append the given values, in order."""
        return self._new(self._value + "".join(self._fragment(value) for value in values))

    def prepend(self, *values: "TextLike | UText") -> "UText":
        """Prepend the given values, in order."""
        return self._new("".join(self._fragment(value) for value in values) + self._value)

    def explode(self, delimiter: TextLike, limit: int | None = None) -> list[str]:
        """
        Split the text on a literal ``delimiter``.

        Args:
            delimiter: The separator. An empty delimiter raises ``ValueError``.
            limit: When positive, the maximum number of pieces; the last piece
                holds the unsplit remainder. ``None`` or a value below 1 means
                no cap, like a negative ``maxsplit`` for :meth:`str.split`.

        Returns:
            The pieces, in order.

        """
        maxsplit = -1 if limit is None else limit - 1
        return self._value.split(self._fragment(delimiter), maxsplit)

    # Replacement

    def replace(self, search: TextLike | Iterable[TextLike], replace: TextLike | Iterable[TextLike]) -> "UText":
        """Replace every occurrence of ``search`` (one value or a list) with ``replace``."""
        return self._new(self._ops.replace(search, replace, self._value))

    def replace_array(self, search: TextLike, replacements: Iterable[TextLike] | Mapping[object, TextLike]) -> "UText":
        """Replace each ``search`` sequentially with the next of ``replacements``."""
        return self._new(self._ops.replace_array(search, replacements, self._value))

    def replace_first(self, search: TextLike, replace: TextLike) -> "UText":
        return self._new(self._ops.replace_first(search, replace, self._value))

    def replace_last(self, search: TextLike, replace: TextLike) -> "UText":
        return self._new(self._ops.replace_last(search, replace, self._value))

    def start(self, prefix: TextLike) -> "UText":
        """Begin the text with a single instance of ``prefix``."""
        return self._new(self._ops.start(self._value, prefix))

    def finish(self, cap: TextLike) -> "UText":
        """End the text with a single instance of ``cap``."""
        return self._new(self._ops.finish(self._value, cap))

    def substr(self, start: int, length: int | None = None) -> "UText":
        return self._new(self._ops.substr(self._value, start, length))

    def trim(self, characters: TextLike | None = None) -> "UText":
        return self._new(self._ops.trim(self._value, characters))

    # Regular expressions

    def match(self, pattern: RegexLike, flags: int = 0) -> "UText":
        """Return the first capture group of the first match, the whole match, or empty text."""
        return self._new(self._ops.match(pattern, self._value, flags))

    def replace_matches(self, pattern: RegexLike, replacement: TextLike, limit: int = -1, flags: int = 0) -> "UText":
        r"""Replace up to ``limit`` matches using a template such as ``r"<\1>"``; -1 means all."""
        return self._new(self._ops.replace_matches(pattern, replacement, self._value, limit, flags))

    def replace_matches_using(
        self,
        pattern: RegexLike,
        callback: Callable[[regex.Match], str],
        limit: int = -1,
        flags: int = 0,
    ) -> "UText":
        """Replace up to ``limit`` matches with the result of ``callback(match)``; -1 means all."""
        return self._new(self._ops.replace_matches_using(pattern, callback, self._value, limit, flags))

    # Conditional

    def when_empty(self, callback: Callable[["UText"], Any]) -> Any:  # noqa: ANN401
        """
        Transform the value with ``callback`` when it is empty.

        Returns:
            ``callback(self)`` if the text is empty, or ``self`` when the
            callback returns ``None``. A non-empty value is returned as is.

        """
        if self.is_empty():
            result = callback(self)
            return self if result is None else result
        return self

    # Conversion

    def to_json(self) -> str:
        """Return the text as a JSON string literal."""
        return json.dumps(self._value)

    def __str__(self) -> str:
        """Return the raw text."""
        return self._value

    def __repr__(self) -> str:
        """Return the debug view, exposing the text under ``string``."""
        return f"{type(self).__name__}(string={self._value!r})"

    def __rich_repr__(self) -> Iterable[tuple[str, str]]:
        """Expose the text under ``string`` to rich's pretty printer."""
        yield "string", self._value

    def __len__(self) -> int:
        """Return the length in codepoints."""
        return len(self._value)

    def __eq__(self, other: object) -> bool:
        """Compare by text, against another UText or a plain string."""
        if isinstance(other, UText):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        """Return the hash of the wrapped text."""
        return hash(self._value)

    def __reduce__(self) -> tuple[type["UText"], tuple[Any, ...]]:
        """Pickle by text; values bound to the shared operations rebind to them on load."""
        if self._ops is default_ops:
            return UText, (self._value,)
        return UText, (self._value, self._ops)

    def __copy__(self) -> "UText":
        """Return ``self``; an immutable value needs no copy."""
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "UText":
        """Return ``self``; an immutable value needs no copy."""
        return self

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:  # noqa: ANN401
        """Validate from ``str`` and serialize as a plain string in pydantic models."""
        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                core_schema.no_info_after_validator_function(cls, core_schema.str_schema()),
            ],
            serialization=core_schema.to_string_ser_schema(),
        )


class UTextJSONEncoder(json.JSONEncoder):
    """A JSON encoder that writes UText values as JSON strings."""

    def default(self, o: Any) -> Any:  # noqa: ANN401
        """Encode UText as its text; defer everything else to the base class."""
        if isinstance(o, UText):
            return str(o)
        return super().default(o)
