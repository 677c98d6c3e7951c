from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

from ..common.validators import Validator
from ..storage.codecs import EmployeeJsonCodec
from ..storage.durable_store import DurableStore
from .model import Employee
from .repository import EmployeeRepository


class JsonEmployeeRepository(EmployeeRepository):
    def __init__(self, path: Path | str, *, validator: Optional[Validator] = None):
        self._store: DurableStore[Employee] = DurableStore(
            path, EmployeeJsonCodec(validator=validator), label="employees"
        )

    @property
    def store(self) -> DurableStore[Employee]:
        return self._store

    def load_all(self) -> List[Employee]:
        return self._store.load()

    def save_all(self, employees: Sequence[Employee]) -> None:
        self._store.save(list(employees))
