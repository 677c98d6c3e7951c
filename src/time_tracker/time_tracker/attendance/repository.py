from __future__ import annotations

from typing import Protocol, Sequence

from .model import TimeRecord


class TimeRecordRepository(Protocol):
    def load_all(self) -> Sequence[TimeRecord]:
        raise NotImplementedError

    def save_all(self, records: Sequence[TimeRecord]) -> None:
        raise NotImplementedError
