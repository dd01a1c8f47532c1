from nobsign.exceptions import (
    BadData,
    BadSignature,
    BadTimeSignature,
    SignatureExpired,
    SignerError,
)
from nobsign.serializer import Serializer, TimedSerializer
from nobsign.signer import Signer, derive_key
from nobsign.timestamp import EPOCH, TimestampSigner

__all__ = [
    "EPOCH",
    "BadData",
    "BadSignature",
    "BadTimeSignature",
    "Serializer",
    "SignatureExpired",
    "Signer",
    "SignerError",
    "TimedSerializer",
    "TimestampSigner",
    "derive_key",
]
