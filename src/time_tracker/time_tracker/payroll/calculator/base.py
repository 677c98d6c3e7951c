from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from ...core.constants import MONEY_QUANTUM
from ...employees.model import Employee

CENT = MONEY_QUANTUM


def round_money(amount: Decimal) -> Decimal:
    """Two decimal places, halves rounded away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class PayComputation:
    hours: float
    pay: Decimal


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, employee: Employee, *, start: date, end: date) -> PayComputation:
        raise NotImplementedError
