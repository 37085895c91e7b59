"""
Custom Exceptions for the Smart SAC backend

This module defines the exception classes raised by services and turned
into HTTP error responses by the API layer.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    OPERATION_FAILED = "OPERATION_FAILED"
    CONFLICT = "CONFLICT"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"

    # Domain specific
    EQUIPMENT_NOT_FOUND = "EQUIPMENT_NOT_FOUND"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Raised when a request is missing or carries a malformed field"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 400
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)
        self.field_errors = field_errors or {}


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


class EquipmentNotFoundError(ResourceNotFoundError):
    """Exception raised when an equipment item is not found"""

    def __init__(
        self,
        equipment_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        super().__init__("Equipment", equipment_id, message)
        self.error_code = ErrorCode.EQUIPMENT_NOT_FOUND


class GameNotFoundError(ResourceNotFoundError):
    """Exception raised when a game is not found"""

    def __init__(
        self,
        game_name: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = "Game not found"
            if game_name:
                message += f" (name: {game_name})"
        super().__init__("Game", game_name, message)
        self.error_code = ErrorCode.GAME_NOT_FOUND


class UserNotFoundError(ResourceNotFoundError):
    """Exception raised when a user account is not found"""

    def __init__(
        self,
        user_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        super().__init__("User", user_id, message)
        self.error_code = ErrorCode.USER_NOT_FOUND


class ConflictError(BaseAppException):
    """
    Raised when a concurrent writer changed a row between read and write.

    The caller may reload and retry.
    """

    def __init__(
        self,
        message: str = "Resource was modified concurrently",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None
    ):
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
            "retryable": True,
        }
        super().__init__(message, ErrorCode.CONFLICT, details, 409)


# ========================================
# Database Exceptions
# ========================================

class DatabaseError(BaseAppException):
    """Exception raised when database operations fail"""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.DATABASE_ERROR,
        status_code: int = 500
    ):
        details = {
            "operation": operation,
            "table": table
        }
        super().__init__(message, error_code, details, status_code)


class PersistenceError(DatabaseError):
    """A write to the store failed; nothing from the operation was kept"""

    def __init__(
        self,
        message: str = "Failed to persist changes",
        operation: Optional[str] = None,
        table: Optional[str] = None
    ):
        super().__init__(message, operation=operation, table=table)


class DuplicateEntryError(DatabaseError):
    """Exception raised when trying to create a duplicate entry"""

    def __init__(
        self,
        message: str = "Duplicate entry",
        field: Optional[str] = None,
        value: Optional[str] = None,
        table: Optional[str] = None
    ):
        super().__init__(message, table=table, error_code=ErrorCode.DUPLICATE_ENTRY, status_code=409)
        self.details.update({"field": field, "value": value})


# ========================================
# Utility Functions
# ========================================

def create_validation_error(field_errors: Dict[str, List[str]]) -> ValidationError:
    """Create a validation error with field-specific errors"""
    total_errors = sum(len(errors) for errors in field_errors.values())
    message = f"Validation failed with {total_errors} error(s)"
    return ValidationError(message, field_errors)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'ResourceNotFoundError',
    'EquipmentNotFoundError',
    'GameNotFoundError',
    'UserNotFoundError',
    'ConflictError',
    'DatabaseError',
    'PersistenceError',
    'DuplicateEntryError',
    'create_validation_error',
]
