from __future__ import annotations


class DirectoryError(Exception):
    """Base class for failures handled at the route boundary."""


class NotFoundError(DirectoryError):
    """The requested entity is absent or its identifier is malformed."""


class PersistenceError(DirectoryError):
    """The document store rejected an insert or delete."""


class VerificationError(DirectoryError):
    """The reCAPTCHA token was not accepted by the verification service."""

    def __init__(self, reason: str, error_codes: list[str] | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.error_codes = error_codes or []
