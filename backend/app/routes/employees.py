"""
Employee Records Backend — Employee Route Handlers
==================================================

What:  CRUD and search endpoints for employee records.
How:   Each handler reads its input, runs field validation (create/update),
       calls EmployeeRepository once, and returns the result. Failures are
       raised as application exceptions and rendered by the global handlers
       in main.py.
Who:   Called by API clients.

Endpoints:
    POST   /employees                 → 201 created record
    GET    /employees                 → 200 all records
    GET    /employees/search/{name}   → 200 matches | 404
    GET    /employees/{employee_id}   → 200 record  | 404 | 500
    PUT    /employees/{employee_id}   → 200 record  | 400 | 404
    DELETE /employees/{employee_id}   → 200 message | 404 | 500
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import (
    EmployeeResponse,
    MessageResponse,
    ValidationErrorResponse,
)
from app.services.employee_validator import parse_employee

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employees"])


# ── Dependencies ──────────────────────────────────────────────────────────

def get_employee_repository(
    db: AsyncSession = Depends(get_db_session),
) -> EmployeeRepository:
    """Bind an EmployeeRepository to the request's session."""
    return EmployeeRepository(db)


async def read_employee_body(request: Request) -> Dict[str, Any]:
    """
    Read the JSON body as a plain mapping.

    A missing or malformed body, or any JSON value other than an object, is
    returned as {} so that the validator reports every required field.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.debug("Request body is not valid JSON")
        return {}
    return payload if isinstance(payload, dict) else {}


EMPLOYEE_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "example": {
                    "emp_name": "Alice Smith",
                    "emp_email": "alice@acme.com",
                    "emp_salary": "50000",
                    "experience": 3,
                    "dept_code": "ENG",
                    "joining_date": "2024-01-15",
                    "secrete_code": "abc",
                }
            }
        },
    }
}


# ── Routes ────────────────────────────────────────────────────────────────

@router.post(
    "",
    status_code=201,
    response_model=EmployeeResponse,
    responses={
        400: {"description": "Invalid fields or save failure", "model": ValidationErrorResponse},
    },
    summary="Create an employee",
    openapi_extra=EMPLOYEE_BODY_DOC,
)
async def create_employee(
    body: Dict[str, Any] = Depends(read_employee_body),
    repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeResponse:
    fields = parse_employee(body)
    employee = await repo.create(fields)
    return EmployeeResponse.model_validate(employee)


@router.get(
    "",
    response_model=List[EmployeeResponse],
    responses={500: {"description": "Storage error", "model": MessageResponse}},
    summary="List all employees",
)
async def list_employees(
    repo: EmployeeRepository = Depends(get_employee_repository),
) -> List[EmployeeResponse]:
    employees = await repo.list_all()
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get(
    "/search/{name}",
    response_model=List[EmployeeResponse],
    responses={
        404: {"description": "No employee name contains the term", "model": MessageResponse},
        500: {"description": "Storage error", "model": MessageResponse},
    },
    summary="Search employees by name",
    description="Case-insensitive substring match against emp_name.",
)
async def search_employees(
    name: str,
    repo: EmployeeRepository = Depends(get_employee_repository),
) -> List[EmployeeResponse]:
    employees = await repo.search_by_name(name)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        404: {"description": "Employee not found", "model": MessageResponse},
        500: {"description": "Malformed id or storage error", "model": MessageResponse},
    },
    summary="Get an employee by id",
)
async def get_employee(
    employee_id: str,
    repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeResponse:
    employee = await repo.get_by_id(employee_id)
    return EmployeeResponse.model_validate(employee)


@router.put(
    "/{employee_id}",
    response_model=EmployeeResponse,
    responses={
        400: {"description": "Invalid fields or save failure", "model": ValidationErrorResponse},
        404: {"description": "Employee not found", "model": MessageResponse},
    },
    summary="Replace all fields of an employee",
    openapi_extra=EMPLOYEE_BODY_DOC,
)
async def update_employee(
    employee_id: str,
    body: Dict[str, Any] = Depends(read_employee_body),
    repo: EmployeeRepository = Depends(get_employee_repository),
) -> EmployeeResponse:
    fields = parse_employee(body)
    employee = await repo.update(employee_id, fields)
    return EmployeeResponse.model_validate(employee)


@router.delete(
    "/{employee_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Employee not found", "model": MessageResponse},
        500: {"description": "Malformed id or storage error", "model": MessageResponse},
    },
    summary="Delete an employee",
)
async def delete_employee(
    employee_id: str,
    repo: EmployeeRepository = Depends(get_employee_repository),
) -> MessageResponse:
    await repo.delete_by_id(employee_id)
    return MessageResponse(message="Employee deleted")
