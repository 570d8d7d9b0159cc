"""
Custom exceptions for the Task API.

This module defines a small exception hierarchy with:
- Machine-readable error codes for API responses
- An HTTP status code carried by each exception
- Structured error data for logging and debugging

Design pattern: Base exception -> Specific exceptions
- TaskAPIError: Base for all application errors
- Specific exceptions inherit from base with predefined error codes
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """
    Standardized error codes for API responses.

    Naming convention: <DOMAIN>_<NUMBER>
    - TASK_xxx: Task lookup errors
    - VAL_xxx: Request validation errors
    - DB_xxx: Persistence errors
    - SYS_xxx: Unexpected internal errors
    """

    TASK_NOT_FOUND = "TASK_001"

    VALIDATION_ERROR = "VAL_001"

    PERSISTENCE_ERROR = "DB_001"

    INTERNAL_ERROR = "SYS_001"


class TaskAPIError(Exception):
    """
    Base exception for all Task API errors.

    Attributes:
        message: Human-readable error description
        status_code: HTTP status code returned to the client
        error_code: Machine-readable error identifier
        details: Additional context (dict or list)
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for API responses.

        Returns:
            dict: Structured error data suitable for JSON responses
        """
        return {
            "error": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        """String representation for logging."""
        return f"{self.error_code.value}: {self.message}"


class TaskNotFoundError(TaskAPIError):
    """
    Raised at the route layer when no task exists for the requested id.

    HTTP Status: 404 Not Found
    """

    def __init__(self, task_id: int):
        super().__init__(
            message=f"Task {task_id} not found",
            status_code=404,
            error_code=ErrorCode.TASK_NOT_FOUND,
            details={"task_id": task_id},
        )


class PersistenceError(TaskAPIError):
    """
    Raised when the database rejects or fails an operation.

    The underlying SQLAlchemy error is chained as ``__cause__`` and logged
    server-side; clients only see a generic message.

    HTTP Status: 500 Internal Server Error
    """

    def __init__(self, message: str = "Database operation failed", details: Any = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code=ErrorCode.PERSISTENCE_ERROR,
            details=details,
        )
