"""Error types shared across contexts.

Input problems are raised as ``protean.exceptions.ValidationError`` and missing
records as ``protean.exceptions.ObjectNotFoundError``; the types below cover
the remaining outcomes the HTTP boundary maps to a status code.
"""


class OrdneryError(Exception):
    """Base class for application errors that carry a client-safe message."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(OrdneryError):
    """The caller's identity is missing or incomplete."""

    status_code = 401


class Forbidden(OrdneryError):
    """The caller is known but not allowed to perform the operation."""

    status_code = 403


class Conflict(OrdneryError):
    """A write collided with an existing record."""

    status_code = 409
