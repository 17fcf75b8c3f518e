"""Error types raised by the quiz and career matching pipeline."""


class CareerMatchError(Exception):
    """Base class for pipeline errors surfaced to callers."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(CareerMatchError):
    """Raised when a submission or question list is rejected.

    Covers unknown question ids, malformed answer payloads, and operations
    that conflict with a session's completion state.
    """


class NotFoundError(CareerMatchError):
    """Raised when a session or career id does not exist."""
