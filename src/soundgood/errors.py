"""
Errors raised by the rental core.

Rejections are handled business outcomes; StoreFailure wraps anything the
database raised. All of them keep the underlying cause on ``__cause__``.
"""


class SoundgoodError(Exception):
    """Base class for every error the rental core reports to callers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationRejection(SoundgoodError):
    """The request was malformed (e.g. an unparsable or out-of-range end date)."""


class RuleRejection(SoundgoodError):
    """A business rule refused the request (quota exceeded, instrument taken)."""


class StoreFailure(SoundgoodError):
    """
    The database failed while reading, writing or committing.

    If rolling back the transaction failed as well, the rollback error is kept
    on ``rollback_error`` and mentioned in the message, so neither is masked.
    """

    def __init__(self, message: str, rollback_error: Exception | None = None):
        if rollback_error is not None:
            message = (
                f"{message} Also failed to rollback transaction because of: {rollback_error}"
            )
        super().__init__(message)
        self.rollback_error = rollback_error


__all__ = ["SoundgoodError", "ValidationRejection", "RuleRejection", "StoreFailure"]
