"""
Employee Records Backend — Pydantic Request/Response Schemas
=============================================================

What:  Pydantic models defining the API contract for employee records.
How:   Request bodies are checked by the rule table in
       app.services.employee_validator (so every violation is reported at
       once with a 400), then normalised into `EmployeeIn`. Responses are
       serialized from ORM objects through `EmployeeResponse`.
Who:   Used by route handlers, the repository and OpenAPI doc generation.
"""

import uuid
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Input Model: normalised, already-validated employee fields
# ══════════════════════════════════════════════════════════════════════════


class EmployeeIn(BaseModel):
    """
    The seven writable fields of an employee after validation.

    Built by `employee_validator.normalize()`; never constructed straight
    from a request body.
    """
    emp_name: str
    emp_email: str
    emp_salary: str = Field(description="Salary in its textual numeric form")
    experience: int = Field(ge=0)
    dept_code: str
    joining_date: date
    secrete_code: str


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class EmployeeResponse(BaseModel):
    """Full representation of a stored employee, including its identifier."""
    id: uuid.UUID = Field(description="Store-assigned employee identifier (UUID)")
    emp_name: str
    emp_email: str
    emp_salary: str
    experience: int
    dept_code: str
    joining_date: date = Field(description="Joining date (YYYY-MM-DD)")
    secrete_code: str

    model_config = {"from_attributes": True}


class Violation(BaseModel):
    """One failed field rule."""
    field: str = Field(description="Name of the offending field")
    message: str = Field(description="Human-readable rule description")


class ValidationErrorResponse(BaseModel):
    """
    Body of a 400 response for invalid employee fields.

    Example:
        {"errors": [{"field": "emp_email", "message": "Invalid email format"}]}
    """
    errors: List[Violation]


class MessageResponse(BaseModel):
    """Confirmation and error body: `{"message": ...}`."""
    message: str


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
