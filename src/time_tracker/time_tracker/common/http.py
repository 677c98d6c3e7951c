from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from flask import request

from .datetime_utils import parse_iso_date
from ..core.exceptions import (
    ConflictError,
    DomainError,
    NotFoundError,
    RangeError,
    ValidationError,
)


def status_for(exc: DomainError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, (ValidationError, RangeError)):
        return 400
    return 500


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def date_arg(name: str, *, default: Optional[date] = None) -> date:
    value = request.args.get(name, "").strip()
    if not value:
        if default is not None:
            return default
        raise ValidationError(f"Query parameter '{name}' is required (YYYY-MM-DD).")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"Query parameter '{name}' must be YYYY-MM-DD.") from None


def money(value: Decimal) -> str:
    return f"{value:.2f}"


def optional(data: dict, key: str) -> Any:
    value = data.get(key)
    if isinstance(value, str) and not value.strip():
        return None
    return value
