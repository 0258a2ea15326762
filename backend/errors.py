"""
Domain errors raised by the service layer.

main.py maps each one onto an HTTP status; nothing here knows about HTTP.
"""


class TymError(Exception):
    """Base class for errors surfaced to the caller with a readable message."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TymError):
    """A referenced user, task, event, block or session does not exist."""

    status_code = 404


class ValidationError(TymError):
    """Invalid time range, overlapping block, or a bad link combination."""

    status_code = 422


class ConflictError(TymError):
    """Unique email/username violation."""

    status_code = 409
