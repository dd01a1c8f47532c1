import hmac

from nobsign.encoding import b64decode, b64encode, constant_time_compare
from nobsign.exceptions import BadSignature

SEPARATOR = "."
DEFAULT_SALT = b"nobi.Signer"
DEFAULT_DIGEST = "sha1"


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return value


def derive_key(
    secret: str | bytes,
    salt: str | bytes = DEFAULT_SALT,
    digest_method: str = DEFAULT_DIGEST,
) -> bytes:
    """Derive the signing key: HMAC(key=secret, msg=salt).

    The secret itself never signs anything; a different salt yields an
    independent key from the same secret.
    """
    return hmac.new(_to_bytes(secret), _to_bytes(salt), digest_method).digest()


class Signer:
    """Signs and verifies string values as ``value.signature`` tokens.

    The default SHA-1 digest and ``nobi.Signer`` salt are wire-compatible
    with existing nobi/nobsign tokens. Changing either produces tokens that
    older deployments reject.
    """

    __slots__ = ("_key", "_digest_method")

    def __init__(
        self,
        secret: str | bytes,
        *,
        digest_method: str = DEFAULT_DIGEST,
        salt: str | bytes = DEFAULT_SALT,
    ):
        object.__setattr__(self, "_digest_method", digest_method)
        object.__setattr__(self, "_key", derive_key(secret, salt, digest_method))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(digest_method={self._digest_method!r})"

    @property
    def separator(self) -> str:
        return SEPARATOR

    @property
    def digest_method(self) -> str:
        return self._digest_method

    def _mac(self, value: bytes) -> bytes:
        return hmac.new(self._key, value, self._digest_method).digest()

    def get_signature(self, value: str) -> str:
        return b64encode(self._mac(value.encode("utf-8")))

    def sign(self, value: str) -> str:
        return f"{value}{SEPARATOR}{self.get_signature(value)}"

    def unsign(self, token: str) -> str:
        """Verify ``token`` and return the value it carries.

        Only the last separator is significant, so values containing ``.``
        survive the round trip.
        """
        value, sep, sig = token.rpartition(SEPARATOR)
        if not sep:
            raise BadSignature(f"No {SEPARATOR!r} found in value")

        try:
            sig_bytes = b64decode(sig)
        except ValueError as exc:
            raise BadSignature("Signature is not valid base64") from exc

        try:
            value_bytes = value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise BadSignature("Value is not valid UTF-8") from exc

        if not constant_time_compare(sig_bytes, self._mac(value_bytes)):
            raise BadSignature("Signature does not match")
        return value

    def validate(self, token: str) -> bool:
        try:
            self.unsign(token)
        except BadSignature:
            return False
        return True
