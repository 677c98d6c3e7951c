from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import date_arg, money
from ..container import Container


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/monthly-hours", methods=["GET"], endpoint="monthly_hours")
    def monthly_hours():
        rows = payroll.monthly_hours()
        return jsonify([{"employee_id": r.employee_id, "name": r.name, "hours": round(r.hours, 2)} for r in rows])

    @app.route("/api/payroll/<employee_id>", methods=["GET"], endpoint="calculate_pay")
    def calculate_pay(employee_id: str):
        result = payroll.calculate_pay(employee_id, date_arg("start"), date_arg("end"))
        return jsonify(
            {
                "employee_id": result.employee.employee_id,
                "name": result.employee.name,
                "type": result.employee.employee_type.value,
                "start": result.start.isoformat(),
                "end": result.end.isoformat(),
                "total_hours": round(result.total_hours, 2),
                "total_pay": money(result.total_pay),
            }
        )
