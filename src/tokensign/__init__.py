"""tokensign - tamper-evident, time-limited signed tokens."""

from tokensign.codec import Codec
from tokensign.errors import (
    BadSignature,
    ConfigurationError,
    DecodingError,
    EncodingError,
    ErrorKind,
    InvalidKey,
    SignatureExpired,
    SigningError,
    TokenError,
    VerificationError,
)
from tokensign.serializers import JsonSerializer, Serializer
from tokensign.signer import Signer, new_signer

__version__ = "0.1.0"

__all__ = [
    "BadSignature",
    "Codec",
    "ConfigurationError",
    "DecodingError",
    "EncodingError",
    "ErrorKind",
    "InvalidKey",
    "JsonSerializer",
    "Serializer",
    "SignatureExpired",
    "Signer",
    "SigningError",
    "TokenError",
    "VerificationError",
    "new_signer",
]
