# app/core/errors.py
"""
Error taxonomy for the API.

Every error carries an HTTP status, a single body key and a human readable
message. Handlers raise these; ``app.main`` renders them as ``{key: message}``
so callers can branch on the key instead of parsing prose.
"""


class AppError(Exception):
    """Base class: unclassified failures map to an opaque 500."""

    status_code: int = 500
    key: str = "error"
    message: str = "Something went wrong."

    def __init__(self, message: str | None = None, *, key: str | None = None, status_code: int | None = None):
        self.message = message or self.message
        self.key = key or self.key
        self.status_code = status_code or self.status_code
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {self.key: self.message}


class ValidationError(AppError):
    """Malformed or out-of-range input."""

    status_code = 400
    key = "input_error"
    message = "Invalid input."


class NotFoundError(AppError):
    """Referenced entity or nested entry is absent."""

    status_code = 404
    key = "not_found"
    message = "That does not exist."


class NotAuthorizedError(AppError):
    """Authenticated, but not the owner of the target."""

    status_code = 401
    key = "not_authorized"
    message = "You are not authorized to do that."


class ConflictError(AppError):
    """Duplicate username, email, like or language."""

    status_code = 400
    key = "conflict"
    message = "That already exists."


class AuthenticationError(AppError):
    """Missing, invalid or expired token (raised before handler logic)."""

    status_code = 401
    key = "unauthorized"
    message = "AUTH_REQUIRED"


class InternalError(AppError):
    pass
