from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_timestamp
from ..container import Container
from ..core.exceptions import NotFoundError
from .model import TimeRecord


def record_to_json(r: TimeRecord) -> dict:
    return {
        "record_id": r.record_id,
        "employee_id": r.employee_id,
        "clock_in": format_timestamp(r.clock_in),
        "clock_out": None if r.clock_out is None else format_timestamp(r.clock_out),
        "hours_worked": round(r.hours_worked, 2),
        "notes": r.notes,
    }


def register(app: Flask, container: Container) -> None:
    roster = container.roster
    ledger = container.ledger

    def _canonical_id(employee_id: str) -> str:
        employee = roster.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee '{employee_id}' not found.")
        return employee.employee_id

    @app.route("/api/attendance/<employee_id>/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in(employee_id: str):
        data = request.get_json(silent=True) or {}
        notes = str(data.get("notes") or "") if isinstance(data, dict) else ""
        record = ledger.clock_in(_canonical_id(employee_id), notes)
        return jsonify(record_to_json(record)), 201

    @app.route("/api/attendance/<employee_id>/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out(employee_id: str):
        record = ledger.clock_out(_canonical_id(employee_id))
        return jsonify(record_to_json(record))

    @app.route("/api/attendance/<employee_id>/records", methods=["GET"], endpoint="employee_records")
    def employee_records(employee_id: str):
        records = ledger.records_for(_canonical_id(employee_id))
        total = sum(r.hours_worked for r in records if not r.is_active)
        return jsonify({"records": [record_to_json(r) for r in records], "total_hours": round(total, 2)})
