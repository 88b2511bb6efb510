"""URL-safe base64 without padding.

Every token field goes through these two helpers, so the token separator can
never appear inside a field as long as it is kept out of ``URLSAFE_ALPHABET``.
"""

import base64
import re
import string

__all__ = ["URLSAFE_ALPHABET", "b64encode", "b64decode"]

URLSAFE_ALPHABET = frozenset(string.ascii_letters + string.digits + "-_")

_URLSAFE_RE = re.compile(r"[A-Za-z0-9_-]*")


def b64encode(data: bytes) -> str:
    """Encode *data* with the RFC 4648 §5 alphabet and strip the padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64decode(text: str) -> bytes:
    """Decode unpadded URL-safe base64.

    Raises ValueError for characters outside the alphabet (padding included)
    and for lengths no base64 encoder can produce.
    """
    if not _URLSAFE_RE.fullmatch(text):
        raise ValueError("invalid character in base64url text")
    if len(text) % 4 == 1:
        raise ValueError("invalid base64url length")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
