"""
Employee Records Backend — Employee Repository
===============================================

What:  Storage operations for employee records behind a typed interface.
How:   Wraps one AsyncSession (the request's session). Each method performs a
       single storage round trip and converts driver failures into
       application exceptions.
Who:   Called by the /employees route handlers.

Error mapping:
    create / update          → SaveError on any storage failure (400)
    list / get / delete /
    search                   → StorageError on any storage failure (500)
    unknown id               → NotFoundError("Employee not found")
    search with no matches   → NotFoundError("No employees found")
    malformed id             → StorageError / SaveError, never NotFoundError
"""

import logging
import uuid
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError, SaveError, StorageError
from app.models.employee import Employee
from app.schemas.employee import EmployeeIn

logger = logging.getLogger(__name__)

# An unreachable server surfaces from the driver as an OSError
# (ConnectionRefusedError, socket.gaierror), not an SQLAlchemyError
STORE_ERRORS = (SQLAlchemyError, OSError)


def parse_employee_id(raw_id: str) -> uuid.UUID:
    """
    Parse a path identifier into the store's UUID key.

    Raises:
        ValueError: `raw_id` is not a UUID.
    """
    return uuid.UUID(str(raw_id))


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EmployeeRepository:
    """
    Employee storage operations bound to one database session.

    Usage:
        repo = EmployeeRepository(session)
        employee = await repo.create(fields)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _find(self, employee_id: uuid.UUID) -> Employee:
        result = await self.session.execute(
            select(Employee).where(Employee.id == employee_id)
        )
        employee = result.scalar_one_or_none()
        if employee is None:
            raise NotFoundError("Employee not found", context={"employee_id": str(employee_id)})
        return employee

    async def create(self, fields: EmployeeIn) -> Employee:
        """
        Insert a new employee; the store assigns its identifier.

        Raises:
            SaveError: The insert or commit failed.
        """
        employee = Employee(**fields.model_dump())
        try:
            self.session.add(employee)
            await self.session.commit()
        except STORE_ERRORS as e:
            await self.session.rollback()
            logger.error("Failed to create employee: %s", str(e))
            raise SaveError(
                message="Could not save the employee",
                context={"error_type": type(e).__name__},
            )
        logger.info("Employee created: %s", employee.id)
        return employee

    async def list_all(self) -> List[Employee]:
        """Every employee in the store's natural order."""
        try:
            result = await self.session.execute(select(Employee))
            return list(result.scalars().all())
        except STORE_ERRORS as e:
            logger.error("Database error listing employees: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve employees",
                context={"error_type": type(e).__name__},
            )

    async def get_by_id(self, raw_id: str) -> Employee:
        """
        Fetch one employee.

        Raises:
            NotFoundError: No employee has this id.
            StorageError: The id is malformed or the query failed.
        """
        try:
            employee_id = parse_employee_id(raw_id)
        except ValueError:
            raise StorageError(message=f"Invalid employee id '{raw_id}'")

        try:
            return await self._find(employee_id)
        except STORE_ERRORS as e:
            logger.error("Database error fetching employee %s: %s", raw_id, str(e))
            raise StorageError(
                message="Could not retrieve the employee",
                context={"employee_id": raw_id},
            )

    async def update(self, raw_id: str, fields: EmployeeIn) -> Employee:
        """
        Overwrite all seven fields of an existing employee.

        Raises:
            NotFoundError: No employee has this id.
            SaveError: The id is malformed or the write failed.
        """
        try:
            employee_id = parse_employee_id(raw_id)
        except ValueError:
            raise SaveError(message=f"Invalid employee id '{raw_id}'")

        try:
            employee = await self._find(employee_id)
            for name, value in fields.model_dump().items():
                setattr(employee, name, value)
            await self.session.commit()
        except STORE_ERRORS as e:
            await self.session.rollback()
            logger.error("Failed to update employee %s: %s", raw_id, str(e))
            raise SaveError(
                message="Could not save the employee",
                context={"employee_id": raw_id, "error_type": type(e).__name__},
            )
        logger.info("Employee updated: %s", employee.id)
        return employee

    async def delete_by_id(self, raw_id: str) -> None:
        """
        Remove an employee.

        Raises:
            NotFoundError: No employee has this id.
            StorageError: The id is malformed or the delete failed.
        """
        try:
            employee_id = parse_employee_id(raw_id)
        except ValueError:
            raise StorageError(message=f"Invalid employee id '{raw_id}'")

        try:
            employee = await self._find(employee_id)
            await self.session.delete(employee)
            await self.session.commit()
        except STORE_ERRORS as e:
            await self.session.rollback()
            logger.error("Failed to delete employee %s: %s", raw_id, str(e))
            raise StorageError(
                message="Could not delete the employee",
                context={"employee_id": raw_id},
            )
        logger.info("Employee deleted: %s", employee_id)

    async def search_by_name(self, term: str) -> List[Employee]:
        """
        Case-insensitive substring search on emp_name.

        Raises:
            NotFoundError: Nothing matched.
            StorageError: The query failed.
        """
        pattern = f"%{escape_like(term)}%"
        try:
            result = await self.session.execute(
                select(Employee).where(Employee.emp_name.ilike(pattern, escape="\\"))
            )
            employees = list(result.scalars().all())
        except STORE_ERRORS as e:
            logger.error("Database error searching employees for %r: %s", term, str(e))
            raise StorageError(
                message="Could not search employees",
                context={"term": term},
            )

        if not employees:
            raise NotFoundError("No employees found", context={"term": term})
        return employees
