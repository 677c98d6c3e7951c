from __future__ import annotations

import logging

from src.time_tracker.time_tracker.container import build_container, load_all, save_all


def test_unreadable_primary_starts_empty_and_is_left_alone(tmp_path, caplog, full_timer):
    seeded = build_container(data_dir=tmp_path)
    seeded.roster.add(full_timer)
    save_all(seeded)

    (tmp_path / "timerecords.txt").unlink()
    (tmp_path / "timerecords.txt").mkdir()

    container = build_container(data_dir=tmp_path)
    with caplog.at_level(logging.CRITICAL):
        load_all(container)

    assert [e.employee_id for e in container.roster.list_all()] == ["FT-001"]
    assert len(container.ledger) == 0
    assert (tmp_path / "timerecords.txt").is_dir()
    assert "Could not read time records" in caplog.text


def test_both_stores_unreadable(tmp_path):
    (tmp_path / "employees.json").mkdir()
    (tmp_path / "timerecords.txt").mkdir()

    container = build_container(data_dir=tmp_path)
    load_all(container)

    assert len(container.roster) == 0
    assert len(container.ledger) == 0
