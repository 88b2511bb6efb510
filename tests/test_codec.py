"""Tests for the payload codec and the JSON serializer."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import pytest
from pydantic import BaseModel

from tokensign.codec import Codec
from tokensign.encoding import b64decode, b64encode
from tokensign.errors import DecodingError, EncodingError, ErrorKind
from tokensign.serializers import JsonSerializer


class User(BaseModel):
    id: int
    name: str


@dataclass
class Point:
    x: int
    y: int


class SortedJsonSerializer:
    """Minimal stdlib-json backend used to check the codec is pluggable."""

    def serialize(self, value: Any) -> bytes:
        return json.dumps(value, sort_keys=True).encode()

    def deserialize(self, data: bytes, target_type: Any = Any) -> Any:
        return json.loads(data)


class TestEncode:
    def test_string_payload(self):
        codec = Codec()
        assert codec.encode("foo string") == b64encode(b'"foo string"')

    def test_output_is_separator_free(self):
        codec = Codec()
        text = codec.encode({"a": ":::", "b": [1, 2, 3], "c": "éè"})
        assert ":" not in text
        assert "=" not in text

    def test_pydantic_model(self):
        codec = Codec()
        text = codec.encode(User(id=1, name="ann"))
        assert json.loads(b64decode(text)) == {"id": 1, "name": "ann"}

    def test_dataclass(self):
        codec = Codec()
        assert json.loads(b64decode(codec.encode(Point(1, 2)))) == {"x": 1, "y": 2}

    def test_unsupported_type(self):
        codec = Codec()
        with pytest.raises(EncodingError) as exc_info:
            codec.encode(object())
        assert exc_info.value.kind is ErrorKind.ENCODING

    def test_cyclic_value(self):
        codec = Codec()
        cyclic: list = []
        cyclic.append(cyclic)
        with pytest.raises(EncodingError):
            codec.encode(cyclic)


class TestDecode:
    def test_round_trip_untyped(self):
        codec = Codec()
        value = {"user": 42, "roles": ["admin"], "active": True, "score": None}
        assert codec.decode(codec.encode(value)) == value

    def test_target_model(self):
        codec = Codec()
        user = codec.decode(codec.encode({"id": 7, "name": "bo"}), User)
        assert user == User(id=7, name="bo")

    def test_target_generic(self):
        codec = Codec()
        assert codec.decode(codec.encode([1, 2, 3]), list[int]) == [1, 2, 3]

    def test_datetime(self):
        codec = Codec()
        when = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert codec.decode(codec.encode(when), datetime) == when

    def test_shape_mismatch(self):
        codec = Codec()
        with pytest.raises(DecodingError) as exc_info:
            codec.decode(codec.encode("foo"), int)
        assert exc_info.value.kind is ErrorKind.DECODING

    def test_invalid_base64(self):
        codec = Codec()
        with pytest.raises(DecodingError):
            codec.decode("not base64!")
        with pytest.raises(DecodingError):
            codec.decode("a")

    def test_invalid_json(self):
        codec = Codec()
        with pytest.raises(DecodingError):
            codec.decode(b64encode(b"{not json"))

    def test_lax_coercion_by_default(self):
        codec = Codec()
        assert codec.decode(codec.encode("5"), int) == 5

    def test_strict_serializer(self):
        codec = Codec(JsonSerializer(strict=True))
        with pytest.raises(DecodingError):
            codec.decode(codec.encode("5"), int)


class TestPluggableSerializer:
    def test_custom_backend_is_used(self):
        codec = Codec(SortedJsonSerializer())
        text = codec.encode({"b": 1, "a": 2})
        assert b64decode(text) == b'{"a": 2, "b": 1}'
        assert codec.decode(text) == {"a": 2, "b": 1}

    def test_custom_backend_type_error_is_encoding_error(self):
        codec = Codec(SortedJsonSerializer())
        with pytest.raises(EncodingError):
            codec.encode({1, 2})
