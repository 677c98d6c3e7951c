from __future__ import annotations

import logging
from pathlib import Path
from typing import Generic, List, Protocol, Sequence, TypeVar

from ..core.constants import BACKUP_SUFFIX, TEMP_SUFFIX
from ..core.exceptions import CorruptionError, StorageError
from .atomic_file import atomic_write_text, copy_atomically

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Codec(Protocol[T]):
    """Whole-collection text format. `decode` raises CorruptionError on bad input."""

    def encode(self, items: Sequence[T]) -> str:
        raise NotImplementedError

    def decode(self, text: str) -> List[T]:
        raise NotImplementedError


class DurableStore(Generic[T]):
    """Atomic, backup-protected persistence of one collection in one file.

    Layout next to the primary file:
      <name>.tmp  staging file for the next write
      <name>.bak  previous primary, refreshed on every successful save
    """

    def __init__(self, path: Path | str, codec: Codec[T], *, label: str = "records"):
        self.path = Path(path)
        self.temp_path = self.path.with_name(self.path.name + TEMP_SUFFIX)
        self.backup_path = self.path.with_name(self.path.name + BACKUP_SUFFIX)
        self._codec = codec
        self._label = label

    def save(self, items: Sequence[T]) -> None:
        text = self._codec.encode(items)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_text(self.path, text, temp_path=self.temp_path, backup_path=self.backup_path)
        except OSError as exc:
            logger.error("Failed to save %s to %s: %s", self._label, self.path, exc)
            raise StorageError(f"Failed to save {self._label}: {exc}") from exc

        logger.info("Saved %d %s to %s", len(items), self._label, self.path)

    def load(self) -> List[T]:
        """Read the collection, restoring the backup once if the primary is corrupt.

        Corruption never propagates: an unrecoverable file yields an empty list
        and a CRITICAL log entry.
        """
        if not self.path.exists():
            logger.info("No saved %s found at %s", self._label, self.path)
            return []

        try:
            items = self._read()
        except CorruptionError as exc:
            logger.error("%s file %s is corrupted (%s); attempting backup restore", self._label, self.path, exc)
            return self._restore_and_reload()

        logger.info("Loaded %d %s from %s", len(items), self._label, self.path)
        return items

    def _read(self) -> List[T]:
        try:
            text = self.path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CorruptionError(f"not valid UTF-8: {exc}") from exc
        except OSError as exc:
            logger.error("Failed to read %s from %s: %s", self._label, self.path, exc)
            raise StorageError(f"Failed to load {self._label}: {exc}") from exc
        return self._codec.decode(text)

    def _restore_and_reload(self) -> List[T]:
        if not self.backup_path.exists():
            logger.critical("No backup available at %s. All %s data lost.", self.backup_path, self._label)
            return []

        try:
            copy_atomically(self.backup_path, self.path)
        except OSError as exc:
            logger.critical("Backup restoration for %s failed: %s", self._label, exc)
            return []

        logger.warning("Backup restored from %s. Re-loading %s", self.backup_path, self._label)
        try:
            items = self._read()
        except CorruptionError as exc:
            logger.critical("Backup %s is corrupted too (%s). All %s data lost.", self.backup_path, exc, self._label)
            return []

        logger.info("Loaded %d %s from restored backup", len(items), self._label)
        return items
