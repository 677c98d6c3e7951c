from __future__ import annotations

from datetime import date
from decimal import Decimal

from ...attendance.service import AttendanceLedger
from ...common.datetime_utils import as_date
from ...core.exceptions import InvalidRangeError, ValidationError
from ...employees.model import Employee, PartTimeEmployee, require_valid_hours
from .base import PayCalculator, PayComputation, round_money


def hourly_pay(hourly_rate: Decimal, hours: float) -> Decimal:
    hours = require_valid_hours(hours)
    return round_money(hourly_rate * Decimal(repr(hours)))


class HourlyPayCalculator(PayCalculator):
    """Part-time rule: hourly rate times closed hours from the ledger."""

    def __init__(self, ledger: AttendanceLedger):
        self._ledger = ledger

    def calculate(self, employee: Employee, *, start: date, end: date) -> PayComputation:
        if not isinstance(employee, PartTimeEmployee):
            raise ValidationError("Hourly pay applies to part-time employees only.")
        if as_date(end) < as_date(start):
            raise InvalidRangeError("End date cannot be before start date.")

        hours = self._ledger.total_hours(employee.employee_id, start, end)
        return PayComputation(hours=hours, pay=hourly_pay(employee.hourly_rate, hours))
