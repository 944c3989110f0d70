"""Tagged errors returned by admin operations.

Every error carries a ``kind`` the client can switch on and the HTTP status
the API layer answers with.
"""


class AdminError(Exception):
    """Base error for admin operations."""

    kind: str = "internal"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the error body shape."""
        return {"kind": self.kind, "message": self.message}


class Unauthenticated(AdminError):
    """Raised when no caller identity is present."""

    kind = "unauthenticated"
    status_code = 401


class PermissionDenied(AdminError):
    """Raised when the caller is not an admin."""

    kind = "permission-denied"
    status_code = 403


class InvalidArgument(AdminError):
    """Raised for missing or self-referential input."""

    kind = "invalid-argument"
    status_code = 400


class InternalError(AdminError):
    """Raised when a required step fails unexpectedly."""

    kind = "internal"
    status_code = 500
