from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import json_body, optional
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from .factory import create_employee
from .model import Employee, FullTimeEmployee


def employee_to_json(e: Employee) -> dict:
    data = {
        "type": e.employee_type.value,
        "employee_id": e.employee_id,
        "name": e.name,
        "email": e.email,
        "hire_date": e.hire_date.isoformat(),
    }
    if isinstance(e, FullTimeEmployee):
        data["monthly_salary"] = str(e.monthly_salary)
        data["overtime_rate"] = str(e.overtime_rate)
    else:
        data["hourly_rate"] = str(e.hourly_rate)
    return data


def register(app: Flask, container: Container) -> None:
    roster = container.roster

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        employees = sorted(roster.list_all(), key=lambda e: e.name.casefold())
        return jsonify([employee_to_json(e) for e in employees])

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    def add_employee():
        data = json_body()
        hire_date = str(data.get("hire_date") or "").strip()
        try:
            hire = parse_iso_date(hire_date)
        except ValueError:
            raise ValidationError("Hire date must be YYYY-MM-DD.") from None

        employee = create_employee(
            data.get("type", ""),
            employee_id=str(data.get("employee_id") or ""),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            hire_date=hire,
            monthly_salary=optional(data, "monthly_salary"),
            overtime_rate=optional(data, "overtime_rate"),
            hourly_rate=optional(data, "hourly_rate"),
        )
        roster.add(employee)
        return jsonify(employee_to_json(employee)), 201

    @app.route("/api/employees/search", methods=["GET"], endpoint="search_employees")
    def search_employees():
        results = roster.search_by_name(request.args.get("q", ""))
        return jsonify([employee_to_json(e) for e in results])

    @app.route("/api/employees/summary", methods=["GET"], endpoint="employee_summary")
    def employee_summary():
        s = roster.summary()
        return jsonify(
            {
                "total": s.total,
                "full_time": s.full_time,
                "part_time": s.part_time,
                "average_tenure_years": None if s.average_tenure_years is None else round(s.average_tenure_years, 1),
            }
        )

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: str):
        employee = roster.find_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee '{employee_id}' not found.")
        return jsonify(employee_to_json(employee))

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="remove_employee")
    def remove_employee(employee_id: str):
        if not roster.remove(employee_id):
            raise NotFoundError(f"Employee '{employee_id}' not found.")
        return "", 204
