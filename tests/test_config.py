"""Tests for the encoding configuration."""

import logging
import unittest

import pytest
from pydantic import ValidationError

from utext import EncodingError, TextConfig, TextOps, get_encoding, ops, set_encoding
from utext.config import DEFAULT_ENCODING, get_default_config


class TestTextConfig(unittest.TestCase):
    """Test suite for the TextConfig model."""

    def test_default_encoding_is_utf8(self) -> None:
        """1. Defaults: A new config uses UTF-8."""
        assert TextConfig().encoding == "UTF-8"
        assert DEFAULT_ENCODING == "UTF-8"

    def test_unknown_encoding_is_rejected(self) -> None:
        """2. Validation: An unknown codec name fails model validation."""
        with pytest.raises(ValidationError, match="Unknown text encoding"):
            TextConfig(encoding="no-such-codec")

    def test_assignment_is_validated(self) -> None:
        """3. Validation: Assigning an unknown codec fails and keeps the old value."""
        cfg = TextConfig(encoding="latin-1")
        with pytest.raises(ValidationError):
            cfg.encoding = "no-such-codec"
        assert cfg.encoding == "latin-1"

    def test_decode_passes_text_through(self) -> None:
        """4. Decoding: str values are returned unchanged."""
        assert TextConfig().decode("héllo") == "héllo"

    def test_decode_bytes_with_configured_encoding(self) -> None:
        """5. Decoding: bytes are decoded with the configured codec."""
        assert TextConfig().decode("héllo".encode()) == "héllo"
        assert TextConfig(encoding="latin-1").decode(b"h\xe9llo") == "héllo"

    def test_decode_invalid_bytes_raises(self) -> None:
        """6. Decoding: bytes that are invalid for the codec propagate UnicodeDecodeError."""
        with pytest.raises(UnicodeDecodeError):
            TextConfig().decode(b"\xff\xfe\xfa")


class TestSharedEncoding(unittest.TestCase):
    """Test suite for the process-wide encoding setter."""

    def tearDown(self) -> None:
        """Restore the default encoding."""
        set_encoding(DEFAULT_ENCODING)

    def test_set_and_get_encoding(self) -> None:
        """1. Setter: get_encoding() reflects the last set_encoding() call."""
        set_encoding("latin-1")
        assert get_encoding() == "latin-1"
        assert get_default_config().encoding == "latin-1"

    def test_set_unknown_encoding_raises_encoding_error(self) -> None:
        """2. Setter: An unknown codec raises EncodingError and keeps the current value."""
        with pytest.raises(EncodingError, match="Invalid encoding setting"):
            set_encoding("no-such-codec")
        assert get_encoding() == DEFAULT_ENCODING

    def test_encoding_error_is_value_error(self) -> None:
        """3. Taxonomy: EncodingError can be caught as ValueError."""
        with pytest.raises(ValueError):
            set_encoding("no-such-codec")

    def test_current_encoding_wins_at_call_time(self) -> None:
        """4. Call time: Default operations read the encoding on every call."""
        data = "café".encode("latin-1")
        set_encoding("latin-1")
        assert ops.length(data) == 4
        set_encoding("cp1252")
        assert ops.upper(data) == "CAFÉ"
        set_encoding("UTF-8")
        with pytest.raises(UnicodeDecodeError):
            ops.length(data)

    def test_explicit_config_is_independent(self) -> None:
        """5. Threading: A TextOps with its own config ignores the shared setting."""
        latin = TextOps(TextConfig(encoding="latin-1"))
        set_encoding("UTF-8")
        assert latin.encoding == "latin-1"
        assert latin.length(b"caf\xe9") == 4

    def test_default_ops_follow_shared_config(self) -> None:
        """6. Threading: TextOps() without a config follows set_encoding()."""
        follower = TextOps()
        set_encoding("utf-16")
        assert follower.encoding == "utf-16"

    def test_set_encoding_logs_debug(self) -> None:
        """7. Logging: Changing the encoding is logged at DEBUG level."""
        with self.assertLogs("utext.config", level=logging.DEBUG) as captured:
            set_encoding("ascii")
        assert any("ascii" in line for line in captured.output)


if __name__ == "__main__":
    unittest.main()
