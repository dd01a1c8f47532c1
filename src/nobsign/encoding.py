import base64
import binascii
import hmac
import re
import struct

_URLSAFE_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")
_INT32 = struct.Struct("<i")


def b64encode(data: bytes) -> str:
    """URL-safe base64 without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64decode(data: str) -> bytes:
    """Strict inverse of :func:`b64encode`.

    Rejects characters outside the URL-safe alphabet (padding included),
    impossible lengths, and encodings with non-zero trailing bits, so that
    exactly one string decodes to any given byte sequence.
    """
    if not _URLSAFE_ALPHABET.fullmatch(data):
        raise ValueError("Invalid base64 character")
    try:
        decoded = base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 length: {len(data)}") from exc
    if b64encode(decoded) != data:
        raise ValueError("Non-canonical base64 encoding")
    return decoded


def to_int32(n: int) -> int:
    return (n + 2**31) % 2**32 - 2**31


def int_to_bytes(n: int) -> bytes:
    return _INT32.pack(to_int32(n))


def bytes_to_int(data: bytes) -> int:
    if len(data) != _INT32.size:
        raise ValueError(f"Expected {_INT32.size} bytes, got {len(data)}")
    return _INT32.unpack(data)[0]


def constant_time_compare(a: bytes, b: bytes) -> bool:
    return hmac.compare_digest(a, b)
