from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..storage.codecs import TimeRecordLineCodec
from ..storage.durable_store import DurableStore
from .model import TimeRecord
from .repository import TimeRecordRepository


class TextTimeRecordRepository(TimeRecordRepository):
    def __init__(self, path: Path | str):
        self._store: DurableStore[TimeRecord] = DurableStore(path, TimeRecordLineCodec(), label="time records")

    @property
    def store(self) -> DurableStore[TimeRecord]:
        return self._store

    def load_all(self) -> List[TimeRecord]:
        return self._store.load()

    def save_all(self, records: Sequence[TimeRecord]) -> None:
        self._store.save(list(records))
