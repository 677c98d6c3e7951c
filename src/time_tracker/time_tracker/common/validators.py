from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Protocol

from ..core.constants import MAX_EMPLOYEE_ID_LENGTH, MAX_MONEY_VALUE, MONEY_QUANTUM
from ..core.exceptions import RangeError, ValidationError

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}$")
_EMPLOYEE_ID_PATTERN = re.compile(r"^[A-Za-z0-9\-_]+$")
_NAME_PATTERN = re.compile(r"^[A-Za-z ]+$")
_LETTER = re.compile(r"[A-Za-z]")


class Validator(Protocol):
    """Field predicates consumed by employee construction."""

    def is_valid_email(self, value: str) -> bool:
        raise NotImplementedError

    def is_valid_employee_id(self, value: str) -> bool:
        raise NotImplementedError

    def is_valid_name(self, value: str) -> bool:
        raise NotImplementedError


class RegexValidator:
    """Default validator: ASCII letters for names, RFC-light emails."""

    def is_valid_email(self, value: str) -> bool:
        if not value or not value.strip():
            return False
        return bool(_EMAIL_PATTERN.match(value.strip()))

    def is_valid_employee_id(self, value: str) -> bool:
        if not value or not value.strip():
            return False
        value = value.strip()
        if len(value) > MAX_EMPLOYEE_ID_LENGTH:
            return False
        return bool(_EMPLOYEE_ID_PATTERN.match(value))

    def is_valid_name(self, value: str) -> bool:
        if not value or not value.strip():
            return False
        value = value.strip()
        return bool(_NAME_PATTERN.match(value)) and bool(_LETTER.search(value))


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} cannot be empty.")
    return value.strip()


def require_money(value, field_name: str) -> Decimal:
    """Coerce to Decimal, enforce 0 <= value <= 1e9 and round half-up to cents."""
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number.")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number.") from None
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a finite number.")
    if amount < 0:
        raise RangeError(f"{field_name} cannot be negative.")
    if amount > MAX_MONEY_VALUE:
        raise RangeError(f"{field_name} exceeds the allowed limit.")
    return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
