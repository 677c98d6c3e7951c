from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Optional


def _fsync_dir(directory: Path) -> None:
    # Not supported on every platform (e.g. Windows); the rename is still atomic there.
    try:
        fd = os.open(str(directory), os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(fd)
    except OSError:
        pass
    finally:
        os.close(fd)


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def atomic_write_text(
    path: Path,
    data: str,
    *,
    temp_path: Optional[Path] = None,
    backup_path: Optional[Path] = None,
    encoding: str = "utf-8",
) -> None:
    """Replace `path` with `data` so readers see either the old or the new file.

    The data is written and fsynced to `temp_path` first. If `path` already
    exists and `backup_path` is given, the current content is copied to the
    backup before `temp_path` is renamed over `path`. On failure the temp file
    is removed and the error propagates; `path` is left as it was.
    """
    path = Path(path)
    temp_path = Path(temp_path) if temp_path else path.with_name(path.name + ".tmp")

    try:
        with open(temp_path, "w", encoding=encoding, newline="\n") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())

        if backup_path is not None and path.exists():
            copy_atomically(path, Path(backup_path))

        os.replace(temp_path, path)
    except BaseException:
        _discard(temp_path)
        raise

    _fsync_dir(path.parent)


def copy_atomically(source: Path, destination: Path) -> None:
    """Copy `source` over `destination` through a sibling temp file."""
    staging = destination.with_name(destination.name + ".tmp")
    try:
        shutil.copyfile(source, staging)
        os.replace(staging, destination)
    except BaseException:
        _discard(staging)
        raise
