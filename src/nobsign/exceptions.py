from datetime import datetime


class SignerError(Exception):
    """Base class for every rejected token."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadData(SignerError):
    """The signature checked out but the payload could not be decoded."""


class BadSignature(SignerError):
    """The token is malformed or its signature does not match."""


class BadTimeSignature(SignerError):
    """The signature matched but the embedded timestamp is missing or malformed."""


class SignatureExpired(SignerError):
    """The token is authentic but older than the allowed maximum age."""

    def __init__(self, message: str, date_signed: datetime | None = None):
        super().__init__(message)
        self.date_signed = date_signed
