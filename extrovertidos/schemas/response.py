from pydantic import BaseModel, Field
from typing import Any, Dict, Generic, Optional, TypeVar

DataType = TypeVar("DataType")

class APIResponse(BaseModel, Generic[DataType]):
    """Envelope for every successful admin/dashboard response."""
    message: str
    data: Optional[DataType] = None

class ErrorDetail(BaseModel):
    code: str = Field(..., description="Stable code such as FORBIDDEN, CONFLICT or BACKEND_ERROR")
    message: str
    details: Optional[Dict[str, Any]] = None

class ErrorResponse(BaseModel):
    error: ErrorDetail
    timestamp: str
    path: str
    request_id: Optional[str] = Field(None, description="Matches the X-Request-ID response header")
