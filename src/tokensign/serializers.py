"""
Serializer Protocol - the pluggable value <-> bytes layer under the codec.

The codec never looks at payload shapes itself; a serializer turns a value
into bytes and back, validating the result against the type the caller asks
for. Implementations raise ValueError or TypeError when they cannot.
"""

import functools
from typing import Any, Protocol

from pydantic import TypeAdapter
from pydantic_core import to_json

__all__ = ["Serializer", "JsonSerializer"]


class Serializer(Protocol):
    """Interface every serialization backend must implement."""

    def serialize(self, value: Any) -> bytes:
        """Return a self-describing byte representation of *value*."""
        ...

    def deserialize(self, data: bytes, target_type: Any = Any) -> Any:
        """Rebuild a value of *target_type* from *data*."""
        ...


@functools.lru_cache(maxsize=128)
def _cached_adapter(target_type: Any) -> TypeAdapter:
    return TypeAdapter(target_type)


def _adapter_for(target_type: Any) -> TypeAdapter:
    try:
        return _cached_adapter(target_type)
    except TypeError:
        # unhashable type expressions can't go through the cache
        return TypeAdapter(target_type)


class JsonSerializer:
    """Compact JSON via pydantic.

    Dumps anything pydantic-core knows how to serialize (plain containers,
    BaseModel, dataclasses, datetimes, UUIDs, enums). Cyclic values and
    unknown types raise ValueError. Loading validates against *target_type*
    with a cached ``TypeAdapter``; ``strict=True`` disables pydantic's lax
    coercions such as ``"5"`` -> ``5``.
    """

    def __init__(self, *, strict: bool = False):
        self.strict = strict

    def serialize(self, value: Any) -> bytes:
        return to_json(value)

    def deserialize(self, data: bytes, target_type: Any = Any) -> Any:
        return _adapter_for(target_type).validate_json(data, strict=self.strict)
