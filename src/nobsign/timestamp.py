import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from nobsign.encoding import b64decode, b64encode, bytes_to_int, int_to_bytes, to_int32
from nobsign.exceptions import BadTimeSignature, SignatureExpired, SignerError
from nobsign.signer import DEFAULT_DIGEST, DEFAULT_SALT, SEPARATOR, Signer

# 2011-01-01T00:00:00Z, shared with the nobi wire format. The int32 offset
# wraps around on 2079-01-19.
EPOCH = 1293840000

_EPOCH_DATETIME = datetime.fromtimestamp(EPOCH, tz=timezone.utc)


def timestamp_to_datetime(ts: int) -> datetime:
    return _EPOCH_DATETIME + timedelta(seconds=ts)


class TimestampSigner:
    """Signer that embeds the signing time and enforces a maximum age.

    Tokens look like ``value.timestamp.signature`` where ``timestamp`` is the
    little-endian int32 number of seconds since :data:`EPOCH`, base64url
    encoded. The outer signature covers the timestamp as well.
    """

    __slots__ = ("_signer", "_clock")

    def __init__(
        self,
        secret: str | bytes,
        *,
        digest_method: str = DEFAULT_DIGEST,
        salt: str | bytes = DEFAULT_SALT,
        clock: Callable[[], float] = time.time,
    ):
        object.__setattr__(
            self, "_signer", Signer(secret, digest_method=digest_method, salt=salt)
        )
        object.__setattr__(self, "_clock", clock)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(digest_method={self._signer.digest_method!r})"

    def get_timestamp(self) -> int:
        """Current time in seconds since EPOCH, wrapped to int32."""
        return to_int32(int(self._clock()) - EPOCH)

    def sign(self, value: str) -> str:
        ts = b64encode(int_to_bytes(self.get_timestamp()))
        return self._signer.sign(f"{value}{SEPARATOR}{ts}")

    def unsign(
        self, token: str, max_age: int, return_timestamp: bool = False
    ) -> str | tuple[str, datetime]:
        """Verify ``token`` and check it is at most ``max_age`` seconds old.

        Raises :class:`BadSignature` if the outer signature fails,
        :class:`BadTimeSignature` if the signed payload carries no usable
        timestamp and :class:`SignatureExpired` if it is too old. Timestamps
        ahead of the local clock are accepted.
        """
        if max_age < 0:
            raise ValueError("max_age must not be negative")

        result = self._signer.unsign(token)

        value, sep, ts_b64 = result.rpartition(SEPARATOR)
        if not sep:
            raise BadTimeSignature("Timestamp missing")

        try:
            ts = bytes_to_int(b64decode(ts_b64))
        except ValueError as exc:
            raise BadTimeSignature("Malformed timestamp") from exc

        age = self.get_timestamp() - ts
        if age > max_age:
            raise SignatureExpired(
                f"Signature age {age} > {max_age} seconds",
                date_signed=timestamp_to_datetime(ts),
            )

        if return_timestamp:
            return value, timestamp_to_datetime(ts)
        return value

    def validate(self, token: str, max_age: int) -> bool:
        try:
            self.unsign(token, max_age)
        except SignerError:
            return False
        return True
