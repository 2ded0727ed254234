"""
Employee Records Backend — Employee Field Validation
=====================================================

What:  Checks a raw field-name → value mapping against the employee field rules.
How:   A static table of (field, predicate, message) rules evaluated in order.
       Every rule runs; every failure is collected. Nothing short-circuits.
Who:   Called by the POST and PUT /employees handlers (same rules for both).

Rule semantics:
    - "is a string" rules reject numbers, booleans, null and missing values
    - "required" rules reject missing values, null and blank strings
    - salary accepts JSON numbers and numeric strings ("50000", "-1.5", ".5")
    - experience accepts non-negative integers and integer strings ("3")
    - joining_date must be a real calendar date written as YYYY-MM-DD
"""

import math
import re
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, NamedTuple

from email_validator import EmailNotValidError, validate_email

from app.exceptions import ValidationError
from app.schemas.employee import EmployeeIn

EMPLOYEE_FIELDS = (
    "emp_name",
    "emp_email",
    "emp_salary",
    "experience",
    "dept_code",
    "joining_date",
    "secrete_code",
)

_NUMERIC_RE = re.compile(r"^[+-]?([0-9]*[.])?[0-9]+$")
_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Sentinel for a field absent from the body (distinct from an explicit null)
_MISSING = object()


# ── Predicates ────────────────────────────────────────────────────────────

def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_present(value: Any) -> bool:
    if value is _MISSING or value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def is_email(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        # test_environment admits the reserved "test" domain
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


def is_numeric(value: Any) -> bool:
    # bool is a subclass of int
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        return bool(_NUMERIC_RE.match(value))
    return False


def is_non_negative_int(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, float):
        return value.is_integer() and value >= 0
    if isinstance(value, str) and _INTEGER_RE.match(value):
        return int(value) >= 0
    return False


def is_iso_date(value: Any) -> bool:
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


# ── Rule Table ────────────────────────────────────────────────────────────

class Rule(NamedTuple):
    field: str
    check: Callable[[Any], bool]
    message: str


EMPLOYEE_RULES = (
    Rule("emp_name", is_string, "Employee name must be a string"),
    Rule("emp_name", is_present, "Employee name is required"),
    Rule("emp_email", is_email, "Invalid email format"),
    Rule("emp_email", is_present, "Employee email is required"),
    Rule("emp_salary", is_numeric, "Salary must be a number"),
    Rule("emp_salary", is_present, "Employee salary is required"),
    Rule("experience", is_non_negative_int, "Experience must be a non-negative integer"),
    Rule("dept_code", is_string, "Department code must be a string"),
    Rule("dept_code", is_present, "Department code is required"),
    Rule("joining_date", is_iso_date, "Joining date must be a valid date in ISO8601 format"),
    Rule("secrete_code", is_string, "Secret code must be a string"),
    Rule("secrete_code", is_present, "Secret code is required"),
)


def validate_employee_fields(fields: Mapping[str, Any]) -> List[Dict[str, str]]:
    """
    Evaluate every employee rule against `fields`.

    Args:
        fields: Raw request body values keyed by field name. Unknown keys are ignored.

    Returns:
        Ordered list of {"field", "message"} dicts; empty when all rules pass.
    """
    violations = []
    for rule in EMPLOYEE_RULES:
        if not rule.check(fields.get(rule.field, _MISSING)):
            violations.append({"field": rule.field, "message": rule.message})
    return violations


def format_salary(value: Any) -> str:
    """
    Render a numeric salary as plain decimal text (no exponent), so the
    stored form always passes `is_numeric` again on a later update.
    """
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def normalize(fields: Mapping[str, Any]) -> EmployeeIn:
    """Convert already-valid raw fields into their stored representation."""
    salary = fields["emp_salary"]
    return EmployeeIn(
        emp_name=fields["emp_name"],
        emp_email=fields["emp_email"],
        emp_salary=salary if isinstance(salary, str) else format_salary(salary),
        experience=int(fields["experience"]),
        dept_code=fields["dept_code"],
        joining_date=date.fromisoformat(fields["joining_date"]),
        secrete_code=fields["secrete_code"],
    )


def parse_employee(fields: Mapping[str, Any]) -> EmployeeIn:
    """
    Validate then normalise a request body.

    Raises:
        ValidationError: At least one rule failed; carries the full violation list.
    """
    violations = validate_employee_fields(fields)
    if violations:
        raise ValidationError(violations)
    return normalize(fields)
