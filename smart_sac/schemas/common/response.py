# --- File: smart_sac/schemas/common/response.py ---
"""
Standard API response wrappers for success and error payloads.
"""

from typing import Any, Dict, Generic, List, TypeVar, Union

from pydantic import Field

from smart_sac.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorDetail",
    "ErrorResponse",
]


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")
    data: Union[T, None] = Field(default=None, description="Response data")

    @classmethod
    def create(
        cls,
        message: str,
        data: Union[T, None] = None,
    ):
        """Create success response."""
        return cls(success=True, message=message, data=data)


class ErrorDetail(BaseSchema):
    """Error detail information."""

    field: Union[str, None] = Field(
        default=None,
        description="Field name causing error",
    )
    message: str = Field(..., description="Error message")
    code: Union[str, None] = Field(
        default=None,
        description="Error code",
    )


class ErrorResponse(BaseSchema):
    """Standard error response."""

    success: bool = Field(default=False, description="Success flag")
    message: str = Field(..., description="Error message")
    errors: Union[List[ErrorDetail], None] = Field(
        default=None,
        description="Detailed errors",
    )
    error_code: Union[str, None] = Field(
        default=None,
        description="Application error code",
    )
    details: Union[Dict[str, Any], None] = Field(
        default=None,
        description="Structured error context",
    )
    path: Union[str, None] = Field(
        default=None,
        description="Request path that caused error",
    )

    @classmethod
    def create(
        cls,
        message: str,
        errors: Union[List[ErrorDetail], None] = None,
        error_code: Union[str, None] = None,
        details: Union[Dict[str, Any], None] = None,
        path: Union[str, None] = None,
    ):
        """Create error response."""
        return cls(
            success=False,
            message=message,
            errors=errors,
            error_code=error_code,
            details=details,
            path=path,
        )
