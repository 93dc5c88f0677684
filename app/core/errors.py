"""
Domain errors raised by the services layer.

Every error carries the HTTP status it maps to; main.py registers one
handler for the whole hierarchy.
"""


class LedgerError(Exception):
    status_code = 500
    default_message = "Internal ledger error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LedgerError):
    status_code = 400
    default_message = "Required fields missing"


class AuthenticationError(LedgerError):
    status_code = 401
    default_message = "Invalid credentials"


class NotFoundError(LedgerError):
    status_code = 404
    default_message = "Not found"


class DuplicateKeyError(LedgerError):
    status_code = 409
    default_message = "Duplicate key"


class StorageError(LedgerError):
    status_code = 500
    default_message = "Storage error"


class SecondaryWriteFailure(StorageError):
    """The mirrored write (receivable / bank fee) of a dual write failed."""

    default_message = "Secondary ledger write failed"
