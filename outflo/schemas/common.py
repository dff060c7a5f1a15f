"""
Common schemas used across multiple endpoints.
"""
from typing import TypeVar, Generic, Optional, Any
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope."""
    success: bool = True
    message: str
    data: T


class ListResponse(ApiResponse[T], Generic[T]):
    """Success envelope for collections, with the item count."""
    count: int


class ErrorResponse(BaseModel):
    """Error envelope."""
    success: bool = False
    message: str
    error: Optional[Any] = None

    class Config:
        json_schema_extra = {
            "example": {"success": False, "message": "Campaign not found", "error": None}
        }


class HealthResponse(BaseModel):
    """Health check response."""
    message: str = "Server is running"
    status: str = "OK"
