"""HMAC-signed, timestamped tokens.

Token format: ``{payload}:{timestamp}:{signature}``

All three fields are unpadded URL-safe base64. The timestamp field decodes to
the decimal nanosecond count since the Unix epoch at signing time, and the
signature is the HMAC of ``{payload}:{timestamp}``. Holding the key is the
only state, so one :class:`Signer` can be shared freely between threads.
"""

import hmac
import re
import time
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from tokensign.codec import Codec
from tokensign.encoding import URLSAFE_ALPHABET, b64decode, b64encode
from tokensign.errors import BadSignature, ConfigurationError, InvalidKey, SignatureExpired

__all__ = ["DEFAULT_DIGEST", "DEFAULT_SEPARATOR", "SUPPORTED_DIGESTS", "Signer", "new_signer"]

DEFAULT_SEPARATOR = ":"
DEFAULT_DIGEST = "sha256"
# sha1 gives algorithm parity with older HMAC-SHA1 deployments; their padded
# fields are not wire compatible with these tokens
SUPPORTED_DIGESTS = ("sha1", "sha224", "sha256", "sha384", "sha512")

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_TIMESTAMP_RE = re.compile(r"-?[0-9]+")


def _coerce_key(key: bytes | bytearray | str) -> bytes:
    if isinstance(key, str):
        key = key.encode("utf-8")
    elif isinstance(key, (bytes, bytearray, memoryview)):
        key = bytes(key)
    else:
        raise InvalidKey(f"Secret key must be bytes or str, not {type(key).__name__}")
    if not key:
        raise InvalidKey("Secret key must not be empty")
    return key


def _check_separator(separator: str) -> str:
    if not isinstance(separator, str) or not separator:
        raise ConfigurationError("Separator must be a non-empty string")
    clashing = sorted(set(separator) & (URLSAFE_ALPHABET | {"="}))
    if clashing:
        raise ConfigurationError(
            f"Separator {separator!r} overlaps the base64url alphabet: {''.join(clashing)}"
        )
    return separator


def _to_nanoseconds(max_age: int | timedelta) -> int:
    if isinstance(max_age, timedelta):
        return (max_age // timedelta(microseconds=1)) * 1000
    if isinstance(max_age, int) and not isinstance(max_age, bool):
        return max_age
    raise TypeError(f"max_age must be int nanoseconds or timedelta, not {type(max_age).__name__}")


class Signer:
    """Signs payloads and verifies tokens with one secret key.

    Parameters
    ----------
    key : bytes | str
        Shared secret. ``str`` keys are UTF-8 encoded. Must not be empty.
    digest : str
        Hash used by the HMAC, one of :data:`SUPPORTED_DIGESTS`.
    separator : str
        Field separator. Must not share a character with the base64url
        alphabet, otherwise fields could not be split unambiguously.
    codec : Codec | None
        Payload codec, JSON by default.
    clock : callable
        Returns the current time as integer nanoseconds since the epoch.
    """

    __slots__ = ("_key", "_digest", "_separator", "_codec", "_clock")

    def __init__(
        self,
        key: bytes | bytearray | str,
        *,
        digest: str = DEFAULT_DIGEST,
        separator: str = DEFAULT_SEPARATOR,
        codec: Codec | None = None,
        clock: Callable[[], int] = time.time_ns,
    ):
        if digest not in SUPPORTED_DIGESTS:
            raise ConfigurationError(
                f"Unsupported digest {digest!r}; choose one of {', '.join(SUPPORTED_DIGESTS)}"
            )
        self._key = _coerce_key(key)
        self._digest = digest
        self._separator = _check_separator(separator)
        self._codec = codec or Codec()
        self._clock = clock

    @property
    def digest(self) -> str:
        return self._digest

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def codec(self) -> Codec:
        return self._codec

    def __repr__(self) -> str:
        return f"Signer(digest={self._digest!r}, separator={self._separator!r})"

    def signature(self, value: str | bytes) -> str:
        """Return the base64url HMAC of *value*."""
        if isinstance(value, str):
            value = value.encode("utf-8")
        return b64encode(hmac.new(self._key, value, self._digest).digest())

    def sign(self, payload: Any) -> str:
        """Serialize *payload*, stamp it with the current time and sign it.

        Raises EncodingError if the payload cannot be serialized.
        """
        payload_field = self._codec.encode(payload)
        timestamp_field = b64encode(str(self._clock()).encode("ascii"))
        message = f"{payload_field}{self._separator}{timestamp_field}"
        return f"{message}{self._separator}{self.signature(message)}"

    def verify(
        self,
        token: str | bytes,
        max_age: int | timedelta = 0,
        target_type: Any = Any,
    ) -> Any:
        """Check *token* and return its payload as *target_type*.

        *max_age* is in nanoseconds (or a timedelta); zero or less means the
        token never expires. The MAC is always checked before the timestamp
        or payload are looked at.

        Raises BadSignature, SignatureExpired or DecodingError.
        """
        max_age_ns = _to_nanoseconds(max_age)
        now = self._clock()

        if isinstance(token, (bytes, bytearray)):
            try:
                token = bytes(token).decode("ascii")
            except UnicodeDecodeError:
                raise BadSignature() from None
        if not isinstance(token, str) or token.count(self._separator) != 2:
            raise BadSignature()

        payload_field, timestamp_field, signature_field = token.split(self._separator, 2)

        expected = self.signature(f"{payload_field}{self._separator}{timestamp_field}")
        if len(expected) != len(signature_field):
            raise BadSignature()
        if not hmac.compare_digest(expected.encode("ascii"), signature_field.encode("utf-8")):
            raise BadSignature()

        if max_age_ns > 0:
            signed_at = self._decode_timestamp(timestamp_field)
            age = now - signed_at
            if age > max_age_ns:
                raise SignatureExpired(signed_at=signed_at, age=age, max_age=max_age_ns)

        return self._codec.decode(payload_field, target_type)

    @staticmethod
    def _decode_timestamp(field: str) -> int:
        try:
            text = b64decode(field).decode("ascii")
        except ValueError:
            raise BadSignature() from None
        if not _TIMESTAMP_RE.fullmatch(text):
            raise BadSignature()
        value = int(text)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise BadSignature()
        return value


def new_signer(key: bytes | bytearray | str, **options: Any) -> Signer:
    """Build a :class:`Signer`; see its parameters for *options*."""
    return Signer(key, **options)
