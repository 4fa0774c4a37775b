"""
Handler error taxonomy.

Each error carries the callable error code the client receives and a short
human-readable message.
"""


class HandlerError(Exception):
    """Base class for failures reported back to the caller."""

    code = "internal"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(HandlerError):
    code = "unauthenticated"


class PermissionDenied(HandlerError):
    code = "permission-denied"


class InvalidArgument(HandlerError):
    code = "invalid-argument"


class NotFound(HandlerError):
    code = "not-found"


class Internal(HandlerError):
    code = "internal"
