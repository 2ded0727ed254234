"""
Employee Records Backend — Custom Exception Hierarchy
======================================================

What:  Application-specific exceptions for the three failure classes of the API.
How:   Each exception carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the validator, the repository and route handlers.

Exception Hierarchy:
    EmployeeRecordsError (base)
    ├── ValidationError     → 400 {"errors": [...]}
    ├── NotFoundError       → 404 {"message": ...}
    └── StorageError        → 500 {"message": ...}
        └── SaveError       → 400 {"message": ...}  (create/update paths)
"""

from typing import Any, Dict, List, Optional


class EmployeeRecordsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned in the API response)
        context:  Additional debug info (logged, NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(EmployeeRecordsError):
    """
    Raised when the submitted employee fields break one or more field rules.

    HTTP:    400 Bad Request

    Carries the complete, ordered violation list so the client can fix every
    field in one round trip.

    Example response:
        {
            "errors": [
                {"field": "experience", "message": "Experience must be a non-negative integer"}
            ]
        }
    """

    def __init__(
        self,
        violations: List[Dict[str, str]],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.violations = list(violations)
        fields = sorted({v["field"] for v in self.violations})
        ctx = context or {}
        ctx["fields"] = fields
        super().__init__(
            message=f"Validation failed for: {', '.join(fields)}",
            context=ctx,
        )


class NotFoundError(EmployeeRecordsError):
    """
    Raised when a requested employee (or any search match) does not exist.

    HTTP:    404 Not Found
    """

    def __init__(
        self,
        message: str = "Employee not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageError(EmployeeRecordsError):
    """
    Raised when the database fails or rejects an operation.

    What:    Store unreachable, statement failed, or the identifier is malformed.
    HTTP:    500 Internal Server Error on read and delete paths

    The message names the failed operation; the driver error is kept in
    `context` for the server log.
    """

    def __init__(
        self,
        message: str = "A storage error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SaveError(StorageError):
    """
    Storage failure while creating or updating an employee.

    HTTP:    400 Bad Request
    """

    def __init__(
        self,
        message: str = "Could not save the employee",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
