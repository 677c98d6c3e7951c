from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import CLOCK_SKEW_TOLERANCE, MAX_SHIFT_HOURS
from ..core.exceptions import InvalidTransitionError, ValidationError


@dataclass
class TimeRecord:
    """Domain entity: one attendance interval.

    A record with no `clock_out` is the employee's active shift. Closing is a
    one-way transition; nothing reopens a record.
    """

    record_id: str
    employee_id: str
    clock_in: datetime
    clock_out: Optional[datetime] = None
    notes: str = ""

    def __post_init__(self) -> None:
        if self.clock_in > now_local() + CLOCK_SKEW_TOLERANCE:
            raise ValidationError("Clock-in cannot be in the future.")
        if self.notes is None:
            self.notes = ""

    @property
    def is_active(self) -> bool:
        return self.clock_out is None

    @property
    def hours_worked(self) -> float:
        """Closed duration in hours, clamped to [0, MAX_SHIFT_HOURS]."""
        if self.clock_out is None:
            return 0.0
        total = (self.clock_out - self.clock_in).total_seconds() / 3600
        if total < 0:
            return 0.0
        return min(total, MAX_SHIFT_HOURS)

    def close(self, at: datetime) -> None:
        if self.clock_out is not None:
            raise InvalidTransitionError(f"Record {self.record_id} is already clocked out.")
        if at < self.clock_in:
            raise InvalidTransitionError("Clock-out cannot be earlier than clock-in.")
        self.clock_out = at
