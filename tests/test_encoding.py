"""Tests for the base64url primitive."""

import pytest

from tokensign.encoding import URLSAFE_ALPHABET, b64decode, b64encode


class TestB64Encode:
    def test_uses_urlsafe_alphabet(self):
        # standard base64 of these bytes is "+/8="
        assert b64encode(b"\xfb\xff") == "-_8"

    def test_strips_padding(self):
        assert b64encode(b"a") == "YQ"
        assert b64encode(b"ab") == "YWI"
        assert b64encode(b"abc") == "YWJj"

    def test_empty(self):
        assert b64encode(b"") == ""

    def test_output_never_leaves_alphabet(self):
        text = b64encode(bytes(range(256)))
        assert set(text) <= URLSAFE_ALPHABET


class TestB64Decode:
    def test_decodes_unpadded(self):
        assert b64decode("-_8") == b"\xfb\xff"
        assert b64decode("YQ") == b"a"
        assert b64decode("") == b""

    def test_rejects_padding(self):
        with pytest.raises(ValueError):
            b64decode("YQ==")

    def test_rejects_standard_alphabet(self):
        with pytest.raises(ValueError):
            b64decode("+/8")

    def test_rejects_whitespace(self):
        with pytest.raises(ValueError):
            b64decode(" YQ")
        with pytest.raises(ValueError):
            b64decode("YQ\n")

    def test_rejects_impossible_length(self):
        with pytest.raises(ValueError):
            b64decode("YWJjZ")

    def test_separator_is_not_in_alphabet(self):
        assert ":" not in URLSAFE_ALPHABET
        with pytest.raises(ValueError):
            b64decode("YQ:YQ")
