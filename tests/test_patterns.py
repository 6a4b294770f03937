"""Tests for glob translation and regex compilation."""

import logging
import unittest

import pytest
import regex

from utext.errors import PatternError, UTextError
from utext.patterns import compile_glob, compile_pattern, escape_glob, translate_glob


@pytest.mark.usefixtures("fresh_pattern_cache")
class TestGlobTranslation(unittest.TestCase):
    """Test suite for the glob to regex pipeline."""

    def test_escape_stage_escapes_metacharacters(self) -> None:
        """1. Escape: Metacharacters are escaped, plain characters are kept."""
        assert escape_glob("a.b") == r"a\.b"
        assert escape_glob("x*") == r"x\*"
        assert escape_glob("plain") == "plain"

    def test_translate_replaces_wildcards_and_anchors(self) -> None:
        """2. Translate: Escaped '*' becomes '.*' and the result is anchored."""
        assert translate_glob("library/*") == r"^library/.*\Z"
        assert translate_glob("*") == r"^.*\Z"
        assert translate_glob("a.b") == r"^a\.b\Z"

    def test_translate_keeps_literal_backslash_before_wildcard(self) -> None:
        """3. Translate: A literal backslash followed by '*' stays a literal backslash."""
        compiled = compile_glob("a\\*")
        assert compiled.match("a\\anything")
        assert not compiled.match("a*")

    def test_compile_glob_is_cached(self) -> None:
        """4. Cache: Compiling the same glob twice returns the same object."""
        assert compile_glob("foo/*") is compile_glob("foo/*")
        assert compile_glob.cache_info().hits >= 1

    def test_glob_translation_is_logged(self) -> None:
        """5. Logging: A cache miss logs the translated source at DEBUG level."""
        with self.assertLogs("utext.patterns", level=logging.DEBUG) as captured:
            compile_glob("logged/*")
        assert any("logged/" in line for line in captured.output)


class TestCompilePattern(unittest.TestCase):
    """Test suite for compile_pattern."""

    def test_compiles_source_strings(self) -> None:
        """1. Compile: A source string becomes a compiled pattern."""
        compiled = compile_pattern(r"\d+")
        assert isinstance(compiled, regex.Pattern)
        assert compiled.search("abc 42")[0] == "42"

    def test_passes_compiled_patterns_through(self) -> None:
        """2. Compile: Pre-compiled patterns are returned as is."""
        compiled = regex.compile(r"\w+")
        assert compile_pattern(compiled) is compiled

    def test_flags_are_part_of_the_cache_key(self) -> None:
        """3. Cache: The same source with different flags compiles separately."""
        plain = compile_pattern("abc")
        folded = compile_pattern("abc", regex.IGNORECASE)
        assert plain is not folded
        assert folded.match("ABC")
        assert not plain.match("ABC")

    def test_invalid_pattern_raises(self) -> None:
        """4. Errors: An invalid pattern raises PatternError from regex.error."""
        with pytest.raises(PatternError, match="Invalid regex pattern '\\(\\?P<incomplete'") as excinfo:
            compile_pattern("(?P<incomplete")
        assert excinfo.value.pattern == "(?P<incomplete"
        assert isinstance(excinfo.value.__cause__, regex.error)

    def test_pattern_error_taxonomy(self) -> None:
        """5. Taxonomy: PatternError is both a UTextError and a ValueError."""
        with pytest.raises(UTextError):
            compile_pattern("[")
        with pytest.raises(ValueError):
            compile_pattern("[")

    def test_flags_with_compiled_pattern_are_rejected(self) -> None:
        """6. Flags: Flags cannot be applied to a pattern that is already compiled."""
        compiled = regex.compile(r"\w+")
        with pytest.raises(ValueError, match="already compiled"):
            compile_pattern(compiled, regex.IGNORECASE)


if __name__ == "__main__":
    unittest.main()
