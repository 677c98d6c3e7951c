from __future__ import annotations

from enum import Enum


class EmployeeType(str, Enum):
    """Discriminator persisted alongside every employee record."""

    FULL_TIME = "FullTime"
    PART_TIME = "PartTime"


class ClockAction(str, Enum):
    """Action label carried by clock event notifications."""

    CLOCK_IN = "Clock In"
    CLOCK_OUT = "Clock Out"
