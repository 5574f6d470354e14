from __future__ import annotations


class AppError(Exception):
    """Base application error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ValidationError(AppError):
    pass


class SigningError(AppError):
    """Any failure of the signing or verification pipeline."""


class ReadError(SigningError):
    """A certificate or key file could not be opened or read."""


class ParseError(SigningError):
    """Key file does not hold a PEM private key block."""


class CryptoError(SigningError):
    pass


class SerializationError(SigningError):
    pass
