from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import ClassVar, Union

from ..core.enums import EmployeeType
from ..core.exceptions import InvalidArgumentError


def require_valid_hours(hours_worked: float) -> float:
    if hours_worked is None or isinstance(hours_worked, bool):
        raise InvalidArgumentError("Hours worked must be a number.")
    hours = float(hours_worked)
    if math.isnan(hours) or math.isinf(hours):
        raise InvalidArgumentError("Invalid numeric value for hours worked.")
    if hours < 0:
        raise InvalidArgumentError("Hours worked cannot be negative.")
    return hours


@dataclass(frozen=True)
class FullTimeEmployee:
    """Domain entity: salaried employee.

    `overtime_rate` is validated and persisted but no pay rule reads it.
    """

    employee_type: ClassVar[EmployeeType] = EmployeeType.FULL_TIME

    employee_id: str
    name: str
    email: str
    hire_date: date
    monthly_salary: Decimal
    overtime_rate: Decimal = Decimal("0")

    def calculate_pay(self, hours_worked: float) -> Decimal:
        """Hours are ignored; prorated pay lives in the payroll calculators."""
        return self.monthly_salary


@dataclass(frozen=True)
class PartTimeEmployee:
    """Domain entity: hourly employee."""

    employee_type: ClassVar[EmployeeType] = EmployeeType.PART_TIME

    employee_id: str
    name: str
    email: str
    hire_date: date
    hourly_rate: Decimal

    def calculate_pay(self, hours_worked: float) -> Decimal:
        hours = require_valid_hours(hours_worked)
        return self.hourly_rate * Decimal(repr(hours))


Employee = Union[FullTimeEmployee, PartTimeEmployee]
