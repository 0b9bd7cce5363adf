from fastapi import status


class InventoryError(Exception):
    """Base class for failures surfaced to API clients as ``{kind, message}``."""

    kind = "InventoryError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Unexpected inventory error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "kind": self.kind, "message": self.message}


class NotFound(InventoryError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidOperation(InventoryError):
    kind = "InvalidOperation"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid operation"


class InsufficientStock(InvalidOperation):
    kind = "InsufficientStock"
    default_message = "Insufficient stock"


class ConstraintViolation(InventoryError):
    kind = "ConstraintViolation"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Constraint violation"


class AuthenticationFailed(InventoryError):
    kind = "AuthenticationFailed"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class PermissionDenied(InventoryError):
    kind = "PermissionDenied"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized to perform this action"


class UpstreamUnavailable(InventoryError):
    kind = "UpstreamUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Data store is unavailable"


__all__ = [
    "AuthenticationFailed",
    "ConstraintViolation",
    "InsufficientStock",
    "InvalidOperation",
    "InventoryError",
    "NotFound",
    "PermissionDenied",
    "UpstreamUnavailable",
]
