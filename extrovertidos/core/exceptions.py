from typing import Any, Optional

from fastapi import HTTPException, status


class AuthorizationError(HTTPException):
    """Actor lacks the role required for the operation. Raised before any side effect."""

    def __init__(self, detail: str = "You do not have permission to perform this action."):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFoundError(HTTPException):
    def __init__(self, detail: str = "Resource not found."):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ConflictError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class BadRequestError(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class BackendError(HTTPException):
    """A backend read or write that the operation cannot do without."""

    def __init__(self, detail: str, cause: Optional[Any] = None):
        super().__init__(status_code=status.HTTP_502_BAD_GATEWAY, detail=detail)
        self.cause = cause
