from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest
from hypothesis import given, settings, strategies as st

from src.time_tracker.time_tracker.attendance.model import TimeRecord
from src.time_tracker.time_tracker.attendance.service import AttendanceLedger, ClockEvent, next_record_number
from src.time_tracker.time_tracker.core.enums import ClockAction
from src.time_tracker.time_tracker.core.exceptions import (
    AlreadyClockedInError,
    ConflictError,
    InvalidTransitionError,
    NoActiveShiftError,
    ValidationError,
)


def test_clock_in_then_out(fixed_now):
    ledger = AttendanceLedger()

    opened = ledger.clock_in("E1", "front desk", now=fixed_now)
    assert opened.record_id == "TR0001"
    assert opened.is_active
    assert opened.hours_worked == 0
    assert ledger.active_record("E1") is opened

    closed = ledger.clock_out("E1", now=fixed_now + timedelta(hours=8, minutes=30))
    assert closed is opened
    assert not closed.is_active
    assert closed.hours_worked == pytest.approx(8.5)
    assert ledger.active_record("E1") is None


def test_record_ids_are_sequential_across_employees(fixed_now):
    ledger = AttendanceLedger()
    ids = [
        ledger.clock_in("E1", now=fixed_now).record_id,
        ledger.clock_in("E2", now=fixed_now).record_id,
    ]
    ledger.clock_out("E1", now=fixed_now + timedelta(hours=1))
    ids.append(ledger.clock_in("E1", now=fixed_now + timedelta(hours=2)).record_id)

    assert ids == ["TR0001", "TR0002", "TR0003"]
    assert [r.record_id for r in ledger.records_for("E1")] == ["TR0001", "TR0003"]


def test_double_clock_in_is_conflict_and_changes_nothing(fixed_now):
    ledger = AttendanceLedger()
    ledger.clock_in("E1", now=fixed_now)

    with pytest.raises(AlreadyClockedInError):
        ledger.clock_in("E1", now=fixed_now + timedelta(minutes=5))

    assert len(ledger) == 1
    assert ledger.clock_in("E2", now=fixed_now).record_id == "TR0002"


def test_clock_out_without_shift_is_conflict(fixed_now):
    ledger = AttendanceLedger()
    with pytest.raises(NoActiveShiftError):
        ledger.clock_out("E1", now=fixed_now)

    ledger.clock_in("E1", now=fixed_now)
    ledger.clock_out("E1", now=fixed_now + timedelta(hours=1))
    with pytest.raises(ConflictError):
        ledger.clock_out("E1", now=fixed_now + timedelta(hours=2))


def test_clock_out_before_clock_in_is_invalid_transition(fixed_now):
    ledger = AttendanceLedger()
    record = ledger.clock_in("E1", now=fixed_now)

    with pytest.raises(InvalidTransitionError):
        ledger.clock_out("E1", now=fixed_now - timedelta(seconds=1))
    assert record.is_active


def test_clock_in_in_the_future_is_rejected():
    ledger = AttendanceLedger()
    with pytest.raises(ValidationError):
        ledger.clock_in("E1", now=datetime.now() + timedelta(minutes=5))
    assert len(ledger) == 0


def test_hours_are_capped_at_72(fixed_now):
    ledger = AttendanceLedger()
    ledger.clock_in("E1", now=fixed_now)
    record = ledger.clock_out("E1", now=fixed_now + timedelta(days=5))
    assert record.hours_worked == 72


def test_negative_durations_collapse_to_zero(fixed_now):
    record = TimeRecord("TR0001", "E1", fixed_now, clock_out=fixed_now - timedelta(hours=3))
    assert record.hours_worked == 0


def test_total_hours_counts_closed_records_in_inclusive_window():
    ledger = AttendanceLedger()
    shifts = [
        (datetime(2024, 2, 29, 9, 0), 4),  # before window
        (datetime(2024, 3, 1, 0, 0), 2),  # on start boundary
        (datetime(2024, 3, 15, 9, 0), 8),
        (datetime(2024, 3, 31, 22, 0), 3),  # end date counts all day
        (datetime(2024, 4, 1, 9, 0), 5),  # after window
    ]
    for start, hours in shifts:
        ledger.clock_in("E1", now=start)
        ledger.clock_out("E1", now=start + timedelta(hours=hours))
    ledger.clock_in("E1", now=datetime(2024, 3, 20, 9, 0))  # open, contributes 0

    assert ledger.total_hours("E1", date(2024, 3, 1), date(2024, 3, 31)) == pytest.approx(13)
    assert ledger.total_hours("E2", date(2024, 3, 1), date(2024, 3, 31)) == 0


def test_total_hours_with_datetime_bounds():
    ledger = AttendanceLedger()
    start = datetime(2024, 3, 1, 9, 0)
    ledger.clock_in("E1", now=start)
    ledger.clock_out("E1", now=start + timedelta(hours=2))

    assert ledger.total_hours("E1", start, start) == pytest.approx(2)
    assert ledger.total_hours("E1", start + timedelta(seconds=1), datetime(2024, 3, 2)) == 0


def test_clock_events_are_published_after_commit(fixed_now):
    ledger = AttendanceLedger()
    seen = []

    def observer(event: ClockEvent):
        seen.append((event.employee_id, event.action, ledger.active_record(event.employee_id) is not None))

    def broken(_event):
        raise RuntimeError("boom")

    ledger.subscribe(broken)
    ledger.subscribe(observer)

    ledger.clock_in("E1", now=fixed_now)
    ledger.clock_out("E1", now=fixed_now + timedelta(hours=1))

    assert seen == [("E1", ClockAction.CLOCK_IN, True), ("E1", ClockAction.CLOCK_OUT, False)]


def test_unsubscribe_stops_delivery(fixed_now):
    ledger = AttendanceLedger()
    seen = []
    unsubscribe = ledger.subscribe(seen.append)
    unsubscribe()

    ledger.clock_in("E1", now=fixed_now)
    assert seen == []


def test_replace_all_recomputes_counter(fixed_now):
    records = [
        TimeRecord("TR0007", "E1", fixed_now, clock_out=fixed_now + timedelta(hours=1)),
        TimeRecord("TR0012", "E2", fixed_now),
        TimeRecord("manual-entry", "E3", fixed_now),
    ]
    ledger = AttendanceLedger(records)

    assert next_record_number(records) == 13
    assert ledger.active_record("E2") is records[1]
    assert ledger.clock_in("E1", now=fixed_now + timedelta(hours=2)).record_id == "TR0013"


def test_replace_all_rejects_two_open_shifts(fixed_now):
    with pytest.raises(AlreadyClockedInError):
        AttendanceLedger([TimeRecord("TR0001", "E1", fixed_now), TimeRecord("TR0002", "E1", fixed_now)])


_ops = st.lists(st.tuples(st.sampled_from(["E1", "E2", "E3"]), st.booleans()), max_size=60)


@settings(max_examples=75, deadline=None)
@given(ops=_ops)
def test_at_most_one_active_record_per_employee(ops):
    ledger = AttendanceLedger()
    now = datetime(2024, 1, 1, 8, 0)
    expected_active = set()

    for employee_id, clocking_in in ops:
        now += timedelta(minutes=37)
        try:
            if clocking_in:
                ledger.clock_in(employee_id, now=now)
                expected_active.add(employee_id)
            else:
                ledger.clock_out(employee_id, now=now)
                expected_active.discard(employee_id)
        except ConflictError:
            pass

        for e in ("E1", "E2", "E3"):
            active = [r for r in ledger.records_for(e) if r.is_active]
            assert len(active) <= 1
            assert bool(active) == (e in expected_active)

    for r in ledger.all_records():
        assert 0 <= r.hours_worked <= 72


@pytest.mark.parametrize("employee_id", ["", "  ", "E1|E2", "E1\nE2", "E1\r"])
def test_clock_in_rejects_ids_that_cannot_be_stored(fixed_now, employee_id):
    ledger = AttendanceLedger()

    with pytest.raises(ValidationError):
        ledger.clock_in(employee_id, now=fixed_now)

    assert len(ledger) == 0
    assert ledger.clock_in("E1", now=fixed_now).record_id == "TR0001"
