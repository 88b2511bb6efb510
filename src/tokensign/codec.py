"""Reversible mapping between a value and a separator-free token field."""

from typing import Any

from tokensign.encoding import b64decode, b64encode
from tokensign.errors import DecodingError, EncodingError
from tokensign.serializers import JsonSerializer, Serializer

__all__ = ["Codec"]


class Codec:
    """Serialize with a pluggable :class:`Serializer`, then base64url-encode.

    Pure: no state beyond the serializer, no side effects.
    """

    def __init__(self, serializer: Serializer | None = None):
        self.serializer = serializer or JsonSerializer()

    def encode(self, value: Any) -> str:
        try:
            data = self.serializer.serialize(value)
        except (ValueError, TypeError) as exc:
            raise EncodingError(f"Payload could not be serialized: {exc}") from exc
        return b64encode(data)

    def decode(self, text: str, target_type: Any = Any) -> Any:
        try:
            data = b64decode(text)
        except ValueError as exc:
            raise DecodingError("Payload field is not valid base64url") from exc
        try:
            return self.serializer.deserialize(data, target_type)
        except ValueError as exc:
            raise DecodingError(f"Payload does not match the requested type: {exc}") from exc
