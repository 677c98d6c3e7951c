from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from ..common.datetime_utils import DateLike, end_of_day, now_local, start_of_day
from ..common.notifications import Notifier
from ..core.constants import RECORD_FIELD_SEPARATOR, RECORD_ID_PREFIX, RECORD_ID_WIDTH
from ..core.enums import ClockAction
from ..core.exceptions import AlreadyClockedInError, NoActiveShiftError, ValidationError
from .model import TimeRecord

logger = logging.getLogger(__name__)

_RECORD_ID_PATTERN = re.compile(rf"^{RECORD_ID_PREFIX}(\d+)$")


@dataclass(frozen=True)
class ClockEvent:
    employee_id: str
    timestamp: datetime
    action: ClockAction


def require_storable_id(employee_id: str) -> str:
    """Employee ids end up inside pipe-delimited lines."""
    if not employee_id or not employee_id.strip():
        raise ValidationError("Employee ID cannot be empty.")
    if RECORD_FIELD_SEPARATOR in employee_id or "\n" in employee_id or "\r" in employee_id:
        raise ValidationError(f"Employee ID cannot contain '{RECORD_FIELD_SEPARATOR}' or line breaks.")
    return employee_id


def next_record_number(records: Iterable[TimeRecord]) -> int:
    """max(numeric suffix of existing ids) + 1; ids of other shapes are ignored."""
    highest = 0
    for r in records:
        m = _RECORD_ID_PATTERN.match(r.record_id)
        if m:
            highest = max(highest, int(m.group(1)))
    return highest + 1


class AttendanceLedger:
    """Use case: clock employees in and out.

    State per employee: no active shift -> clock_in -> active shift ->
    clock_out -> no active shift. Closed records stay in the history.

    `_records` (append order) is the source of truth; `_by_employee` is a
    derived grouping and every mutation updates both.
    """

    def __init__(self, records: Iterable[TimeRecord] = ()):
        self._records: List[TimeRecord] = []
        self._by_employee: Dict[str, List[TimeRecord]] = {}
        self._next_number = 1
        self._events: Notifier[ClockEvent] = Notifier()
        self.replace_all(records)

    def subscribe(self, callback: Callable[[ClockEvent], None]) -> Callable[[], None]:
        return self._events.subscribe(callback)

    def active_record(self, employee_id: str) -> Optional[TimeRecord]:
        for r in self._by_employee.get(employee_id, ()):
            if r.is_active:
                return r
        return None

    def clock_in(self, employee_id: str, notes: str = "", *, now: Optional[datetime] = None) -> TimeRecord:
        employee_id = require_storable_id(employee_id)
        now = now or now_local()
        notes = notes or ""

        if self.active_record(employee_id) is not None:
            raise AlreadyClockedInError(f"Employee {employee_id} is already clocked in.")

        record_id = f"{RECORD_ID_PREFIX}{self._next_number:0{RECORD_ID_WIDTH}d}"
        record = TimeRecord(record_id=record_id, employee_id=employee_id, clock_in=now, notes=notes)
        self._next_number += 1

        self._records.append(record)
        self._by_employee.setdefault(employee_id, []).append(record)

        logger.info("Employee %s clocked in at %s (%s)", employee_id, now, record_id)
        self._events.publish(ClockEvent(employee_id=employee_id, timestamp=now, action=ClockAction.CLOCK_IN))
        return record

    def clock_out(self, employee_id: str, *, now: Optional[datetime] = None) -> TimeRecord:
        now = now or now_local()

        record = self.active_record(employee_id)
        if record is None:
            raise NoActiveShiftError(f"Employee {employee_id} has no active clock-in.")

        record.close(now)

        logger.info("Employee %s clocked out. Hours worked: %.2f", employee_id, record.hours_worked)
        self._events.publish(ClockEvent(employee_id=employee_id, timestamp=now, action=ClockAction.CLOCK_OUT))
        return record

    def records_for(self, employee_id: str) -> List[TimeRecord]:
        return list(self._by_employee.get(employee_id, ()))

    def all_records(self) -> List[TimeRecord]:
        return list(self._records)

    def total_hours(self, employee_id: str, start: DateLike, end: DateLike) -> float:
        """Sum hours of closed records whose clock-in lies in [start, end].

        Plain dates cover whole days: `start` from midnight, `end` to the last
        microsecond of that day.
        """
        lower = start_of_day(start)
        upper = end_of_day(end)
        return sum(
            r.hours_worked
            for r in self._by_employee.get(employee_id, ())
            if not r.is_active and lower <= r.clock_in <= upper
        )

    def replace_all(self, records: Iterable[TimeRecord]) -> None:
        """Swap the whole ledger and recompute the id counter."""
        items = list(records)
        grouped: Dict[str, List[TimeRecord]] = {}
        active = set()
        for r in items:
            if r.is_active:
                if r.employee_id in active:
                    raise AlreadyClockedInError(f"Employee {r.employee_id} has more than one open shift.")
                active.add(r.employee_id)
            grouped.setdefault(r.employee_id, []).append(r)

        self._records = items
        self._by_employee = grouped
        self._next_number = next_record_number(items)

    def __len__(self) -> int:
        return len(self._records)
