from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List

from ...common.datetime_utils import DateLike, as_date, days_in_month, iter_month_starts, last_of_month
from ...core.exceptions import InvalidRangeError, ValidationError
from ...employees.model import Employee, FullTimeEmployee
from .base import PayCalculator, PayComputation, round_money


@dataclass(frozen=True)
class MonthSegment:
    """Part of a pay period that falls inside one calendar month."""

    year: int
    month: int
    overlap_days: int
    days_in_month: int

    @property
    def fraction(self) -> Decimal:
        return Decimal(self.overlap_days) / Decimal(self.days_in_month)


def month_segments(start: DateLike, end: DateLike) -> List[MonthSegment]:
    start, end = as_date(start), as_date(end)
    if end < start:
        raise InvalidRangeError("End date cannot be before start date.")

    segments = []
    for month_start in iter_month_starts(start, end):
        overlap_start = max(start, month_start)
        overlap_end = min(end, last_of_month(month_start))
        segments.append(
            MonthSegment(
                year=month_start.year,
                month=month_start.month,
                overlap_days=(overlap_end - overlap_start).days + 1,
                days_in_month=days_in_month(month_start.year, month_start.month),
            )
        )
    return segments


def prorate_monthly_salary(monthly_salary: Decimal, start: DateLike, end: DateLike) -> Decimal:
    """Allocate a monthly salary over the inclusive range [start, end].

    Each calendar month contributes salary * overlap_days / days_in_month.
    The total is rounded once, to cents, at the end; prorating two adjacent
    sub-ranges separately may therefore differ from the whole by 0.01.
    """
    total = Decimal("0")
    for segment in month_segments(start, end):
        total += monthly_salary * segment.overlap_days / segment.days_in_month
    return round_money(total)


class ProratedSalaryCalculator(PayCalculator):
    """Full-time rule: monthly salary prorated by calendar days."""

    def calculate(self, employee: Employee, *, start: date, end: date) -> PayComputation:
        if not isinstance(employee, FullTimeEmployee):
            raise ValidationError("Prorated salary applies to full-time employees only.")
        return PayComputation(hours=0.0, pay=prorate_monthly_salary(employee.monthly_salary, start, end))
