# showlog/core/exceptions.py
"""
Domain errors raised by the services and rendered by the API.

Every error carries a machine-readable ``kind``, the HTTP status it maps to
and a human-readable message naming the offending field or record.
"""

from typing import Optional


class ShowlogError(Exception):
    """Base application error with structured information"""

    kind = "error"
    status_code = 500

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.kind, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(ShowlogError):
    """A required field is missing or malformed."""

    kind = "validation_error"
    status_code = 400


class ConflictError(ShowlogError):
    """A unique constraint would be violated."""

    kind = "conflict"
    status_code = 409


class NotFoundError(ShowlogError):
    """A referenced id, slug or name does not resolve."""

    kind = "not_found"
    status_code = 404


class ReferentialIntegrityError(ShowlogError):
    """A venue cannot be deleted while concerts reference it."""

    kind = "referential_integrity"
    status_code = 409


class TransactionAbortedError(ShowlogError):
    """
    A bulk import failed part-way through and was rolled back in full.

    The original error is kept as ``cause``; the response status is the
    cause's status so callers see the same outcome as a first-record failure.
    """

    kind = "transaction_aborted"

    def __init__(self, cause: ShowlogError, processed: int):
        self.cause = cause
        self.processed = processed
        self.status_code = cause.status_code
        super().__init__(
            f"Import rolled back: {cause.message}",
            details=cause.details,
        )

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["cause"] = self.cause.kind
        return body
