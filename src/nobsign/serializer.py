"""Sign JSON-serializable data rather than plain strings."""

import json
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any

from nobsign.encoding import b64decode, b64encode
from nobsign.exceptions import BadData
from nobsign.signer import DEFAULT_DIGEST, DEFAULT_SALT, Signer
from nobsign.timestamp import TimestampSigner


def _dump_payload(obj: Any) -> str:
    return b64encode(json.dumps(obj, separators=(",", ":")).encode("utf-8"))


def _load_payload(payload: str) -> Any:
    try:
        return json.loads(b64decode(payload).decode("utf-8"))
    except ValueError as exc:
        raise BadData(f"Could not load payload: {exc}") from exc


class Serializer:
    def __init__(
        self,
        secret: str | bytes,
        *,
        digest_method: str = DEFAULT_DIGEST,
        salt: str | bytes = DEFAULT_SALT,
    ):
        self._signer = Signer(secret, digest_method=digest_method, salt=salt)

    def dumps(self, obj: Any) -> str:
        return self._signer.sign(_dump_payload(obj))

    def loads(self, token: str) -> Any:
        return _load_payload(self._signer.unsign(token))


class TimedSerializer:
    """Like :class:`Serializer` but tokens expire after ``max_age`` seconds."""

    def __init__(
        self,
        secret: str | bytes,
        *,
        digest_method: str = DEFAULT_DIGEST,
        salt: str | bytes = DEFAULT_SALT,
        clock: Callable[[], float] = time.time,
    ):
        self._signer = TimestampSigner(
            secret, digest_method=digest_method, salt=salt, clock=clock
        )

    def dumps(self, obj: Any) -> str:
        return self._signer.sign(_dump_payload(obj))

    def loads(
        self, token: str, max_age: int, return_timestamp: bool = False
    ) -> Any | tuple[Any, datetime]:
        payload, date_signed = self._signer.unsign(token, max_age, return_timestamp=True)
        obj = _load_payload(payload)
        if return_timestamp:
            return obj, date_signed
        return obj
