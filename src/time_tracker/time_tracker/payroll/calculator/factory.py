from __future__ import annotations

from dataclasses import dataclass

from ...attendance.service import AttendanceLedger
from ...core.enums import EmployeeType
from ...employees.model import Employee
from .base import PayCalculator
from .hourly_calculator import HourlyPayCalculator
from .proration import ProratedSalaryCalculator


@dataclass
class PayCalculatorFactory:
    """Factory Pattern: choose the pay rule from the employee's variant tag."""

    ledger: AttendanceLedger

    def for_employee(self, employee: Employee) -> PayCalculator:
        if employee.employee_type == EmployeeType.FULL_TIME:
            return ProratedSalaryCalculator()
        return HourlyPayCalculator(self.ledger)
