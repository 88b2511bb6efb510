"""Error taxonomy for token signing and verification.

Callers tell failures apart by exception class or by ``exc.kind``, never by
matching on the message.

Hierarchy::

    TokenError
    ├── InvalidKey
    ├── ConfigurationError
    ├── SigningError
    │   └── EncodingError
    └── VerificationError
        ├── BadSignature
        ├── SignatureExpired
        └── DecodingError
"""

from enum import Enum

__all__ = [
    "ErrorKind",
    "TokenError",
    "InvalidKey",
    "ConfigurationError",
    "SigningError",
    "EncodingError",
    "VerificationError",
    "BadSignature",
    "SignatureExpired",
    "DecodingError",
]


class ErrorKind(str, Enum):
    INVALID_KEY = "invalid_key"
    INVALID_CONFIG = "invalid_config"
    ENCODING = "encoding_error"
    BAD_SIGNATURE = "bad_signature"
    SIGNATURE_EXPIRED = "signature_expired"
    DECODING = "decoding_error"


class TokenError(Exception):
    """Base class for every error raised by tokensign."""

    kind: ErrorKind
    default_message = "token error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class InvalidKey(TokenError, ValueError):
    kind = ErrorKind.INVALID_KEY
    default_message = "Invalid secret key"


class ConfigurationError(TokenError, ValueError):
    kind = ErrorKind.INVALID_CONFIG
    default_message = "Invalid signer configuration"


class SigningError(TokenError):
    kind = ErrorKind.ENCODING
    default_message = "Could not sign payload"


class EncodingError(SigningError):
    kind = ErrorKind.ENCODING
    default_message = "Payload could not be serialized"


class VerificationError(TokenError):
    kind = ErrorKind.BAD_SIGNATURE
    default_message = "Could not verify token"


class BadSignature(VerificationError):
    """Wrong field count, MAC mismatch or unreadable timestamp.

    Deliberately coarse: the message never says which check failed.
    """

    kind = ErrorKind.BAD_SIGNATURE
    default_message = "Bad Signature"


class SignatureExpired(VerificationError):
    """The MAC is valid but the token is older than the allowed age.

    All values are nanoseconds. They come from a MAC-verified timestamp.
    """

    kind = ErrorKind.SIGNATURE_EXPIRED
    default_message = "Signature Expired"

    def __init__(self, signed_at: int, age: int, max_age: int):
        super().__init__()
        self.signed_at = signed_at
        self.age = age
        self.max_age = max_age


class DecodingError(VerificationError):
    kind = ErrorKind.DECODING
    default_message = "Payload could not be deserialized"
