"""Snapshot the data files.

Note: Copies the employee and time-record files into `backups/` with a
timestamp suffix. The `.bak` files kept by the stores only hold the previous
save; use this script for longer-lived snapshots.
"""

from __future__ import annotations

import importlib
import shutil
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    data_dir = Path(settings.DATA_DIR)

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    copied = 0
    for name in (settings.EMPLOYEES_FILE, settings.TIME_RECORDS_FILE):
        source = data_dir / name
        if not source.exists():
            print(f"SKIP: {source} does not exist")
            continue
        target = out_dir / f"{source.stem}_{ts}{source.suffix}"
        shutil.copy2(source, target)
        copied += 1
        print(f"OK: Backup created: {target}")

    if not copied:
        raise SystemExit(f"No data files found in {data_dir}.")


if __name__ == "__main__":
    main()
