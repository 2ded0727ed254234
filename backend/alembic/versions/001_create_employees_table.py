"""Create employees table

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Creates the `employees` table holding every employee record.
How:   One row per employee, UUID primary key assigned by the application.

Rollback: downgrade() drops the table entirely (destructive: all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the employees table. Column docs live in app/models/employee.py."""
    op.create_table(
        "employees",
        sa.Column(
            "id",
            sa.Uuid(as_uuid=True),
            nullable=False,
            comment="Store-assigned identifier",
        ),
        sa.Column("emp_name", sa.String(255), nullable=False),
        sa.Column("emp_email", sa.String(320), nullable=False),
        sa.Column("emp_salary", sa.String(64), nullable=False),
        sa.Column(
            "experience",
            sa.Integer(),
            nullable=False,
            comment="Years of experience, non-negative",
        ),
        sa.Column("dept_code", sa.String(64), nullable=False),
        sa.Column("joining_date", sa.Date(), nullable=False),
        sa.Column("secrete_code", sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop the employees table. WARNING: all employee data is lost."""
    op.drop_table("employees")
