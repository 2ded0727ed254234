"""
Employee Records Backend — Employee SQLAlchemy Model
=====================================================

What:  ORM model representing the `employees` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by EmployeeRepository for CRUD operations and by Alembic for schema management.

Table Design:
    - UUID primary key, generated on insert, never changed afterwards
    - emp_salary is TEXT: validated as numeric on write, kept in its submitted form
    - joining_date is a DATE (calendar date, no time component)
    - No uniqueness constraints besides the primary key
"""

import uuid
from datetime import date

from sqlalchemy import Date, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Employee(Base):
    """
    A single employee record.

    Lifecycle:
        1. Created by POST /employees (id assigned here)
        2. All seven fields overwritten together by PUT /employees/{id}
        3. Removed by DELETE /employees/{id}
    """

    __tablename__ = "employees"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned identifier",
    )

    emp_name: Mapped[str] = mapped_column(String(255), nullable=False)
    emp_email: Mapped[str] = mapped_column(String(320), nullable=False)

    # Numeric-as-text, e.g. "50000" or "72500.50"
    emp_salary: Mapped[str] = mapped_column(String(64), nullable=False)

    experience: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Years of experience, non-negative",
    )

    dept_code: Mapped[str] = mapped_column(String(64), nullable=False)
    joining_date: Mapped[date] = mapped_column(Date, nullable=False)

    # Stored as plain text
    secrete_code: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Employee(id={self.id}, emp_name='{self.emp_name}', dept_code='{self.dept_code}')>"
