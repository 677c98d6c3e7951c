from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import as_date, now_local
from ..common.validators import RegexValidator, Validator, require_money, require_non_empty
from ..core.constants import MAX_EMPLOYEE_ID_LENGTH
from ..core.enums import EmployeeType
from ..core.exceptions import ValidationError
from .model import Employee, FullTimeEmployee, PartTimeEmployee

_DEFAULT_VALIDATOR = RegexValidator()


def create_employee(
    employee_type: EmployeeType | str,
    *,
    employee_id: str,
    name: str,
    email: str,
    hire_date: date,
    monthly_salary: Decimal | float | str | None = None,
    overtime_rate: Decimal | float | str | None = None,
    hourly_rate: Decimal | float | str | None = None,
    validator: Optional[Validator] = None,
    today: Optional[date] = None,
) -> Employee:
    """Build a validated employee of the requested variant.

    Fields are checked in declaration order and the first violation is raised
    on its own, so an interactive caller can re-prompt for a single field.
    """
    validator = validator or _DEFAULT_VALIDATOR
    try:
        employee_type = EmployeeType(employee_type)
    except ValueError:
        raise ValidationError(f"Unknown employee type '{employee_type}'.") from None

    employee_id = require_non_empty(employee_id, "Employee ID")
    if len(employee_id) > MAX_EMPLOYEE_ID_LENGTH:
        raise ValidationError(f"Employee ID cannot exceed {MAX_EMPLOYEE_ID_LENGTH} characters.")
    if not validator.is_valid_employee_id(employee_id):
        raise ValidationError("Employee ID can only contain letters, numbers, '-' or '_'.")

    name = require_non_empty(name, "Name")
    if not validator.is_valid_name(name):
        raise ValidationError("Name can only contain letters and spaces and must contain at least one letter.")

    email = require_non_empty(email, "Email")
    if not validator.is_valid_email(email):
        raise ValidationError("Invalid email format.")

    if not isinstance(hire_date, date):
        raise ValidationError("Hire date must be a date.")
    today = today or now_local().date()
    hire_day = as_date(hire_date)
    if hire_day > today:
        raise ValidationError("Hire date cannot be in the future.")

    if employee_type == EmployeeType.FULL_TIME:
        if monthly_salary is None:
            raise ValidationError("Monthly salary is required for full-time employees.")
        return FullTimeEmployee(
            employee_id=employee_id,
            name=name,
            email=email,
            hire_date=hire_day,
            monthly_salary=require_money(monthly_salary, "Monthly salary"),
            overtime_rate=require_money(overtime_rate if overtime_rate is not None else 0, "Overtime rate"),
        )

    if hourly_rate is None:
        raise ValidationError("Hourly rate is required for part-time employees.")
    return PartTimeEmployee(
        employee_id=employee_id,
        name=name,
        email=email,
        hire_date=hire_day,
        hourly_rate=require_money(hourly_rate, "Hourly rate"),
    )
