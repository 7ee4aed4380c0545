# core/errors.py
"""
Service-level exceptions.

Services raise these; the API maps them to HTTP status codes and the
desktop client shows `message` in a snack bar.
"""


def _value(status):
    return getattr(status, "value", status)


class BigBiteError(Exception):
    """Base class for every error the services raise on purpose."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(BigBiteError):
    """Malformed or missing input: empty cart, blank address, unavailable item..."""


class NotFoundError(BigBiteError):
    """No such order or food."""


class AccessDeniedError(BigBiteError, PermissionError):
    """Role or ownership check failed."""


class OrderReadOnlyError(BigBiteError):
    """Write attempted on a completed or cancelled order."""

    def __init__(self, current_status, message: str = "Order is read-only (completed or cancelled)"):
        super().__init__(message)
        self.current_status = current_status

    def to_dict(self) -> dict:
        return {"message": self.message, "currentStatus": _value(self.current_status)}


class InvalidTransitionError(BigBiteError):
    """Requested status is not reachable from the current one."""

    def __init__(self, current_status, requested_status, allowed_next, message: str = "Invalid status transition"):
        super().__init__(message)
        self.current_status = current_status
        self.requested_status = requested_status
        self.allowed_next = list(allowed_next)

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "currentStatus": _value(self.current_status),
            "requestedStatus": _value(self.requested_status),
            "allowedNext": [_value(s) for s in self.allowed_next],
        }
