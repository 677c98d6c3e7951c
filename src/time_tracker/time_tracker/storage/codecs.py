"""Text formats for the two persisted collections.

Employees: pretty-printed JSON array with a `Type` discriminator per object,
PascalCase keys. Comments and trailing commas are accepted on read.

Time records: one `recordId|employeeId|clockIn|clockOut-or-NULL|notes` line
per record, timestamps as `yyyy-MM-dd HH:mm:ss`.
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from ..attendance.model import TimeRecord
from ..common.datetime_utils import format_timestamp, parse_timestamp
from ..common.validators import Validator
from ..core.constants import RECORD_FIELD_SEPARATOR
from ..core.enums import EmployeeType
from ..core.exceptions import CorruptionError, DomainError, UnknownVariantError
from ..employees.factory import create_employee
from ..employees.model import Employee, FullTimeEmployee, PartTimeEmployee

_NEWLINES = re.compile(r"[\r\n]+")
_FRACTION = re.compile(r"\.(\d+)")


def strip_json_extras(text: str) -> str:
    """Drop `//` and `/* */` comments and trailing commas outside string literals."""
    out: List[str] = []
    i, n = 0, len(text)
    in_string = False
    while i < n:
        ch = text[i]
        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
        elif text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            if end == -1:
                raise CorruptionError("unterminated comment")
            i = end + 2
        elif ch == ",":
            j = i + 1
            while j < n and text[j] in " \t\r\n":
                j += 1
            if j < n and text[j] in "]}":
                i += 1
            else:
                out.append(ch)
                i += 1
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def _json_number(value: Decimal) -> Any:
    # Money is validated to cents, so the shortest float repr reads back exactly.
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _parse_hire_date(value: Any) -> date:
    if not isinstance(value, str):
        raise CorruptionError(f"HireDate must be a string, got {value!r}")
    # Round-trip timestamps from other writers may carry 7 fractional digits or a Z suffix
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise CorruptionError(f"invalid HireDate {value!r}") from None


class EmployeeJsonCodec:
    def __init__(self, *, validator: Validator | None = None):
        self._validator = validator

    def encode(self, employees: Sequence[Employee]) -> str:
        return json.dumps([self.to_dict(e) for e in employees], indent=2, ensure_ascii=False)

    @staticmethod
    def to_dict(employee: Employee) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "Type": employee.employee_type.value,
            "EmployeeId": employee.employee_id,
            "Name": employee.name,
            "Email": employee.email,
            "HireDate": datetime.combine(employee.hire_date, datetime.min.time()).isoformat(),
        }
        if isinstance(employee, FullTimeEmployee):
            data["MonthlySalary"] = _json_number(employee.monthly_salary)
            data["OvertimeRate"] = _json_number(employee.overtime_rate)
        elif isinstance(employee, PartTimeEmployee):
            data["HourlyRate"] = _json_number(employee.hourly_rate)
        return data

    @staticmethod
    def resolve_type(fields: Dict[str, Any]) -> EmployeeType:
        """The `Type` tag wins; untagged legacy records are sniffed by pay field."""
        if "type" in fields:
            tag = fields["type"]
            try:
                return EmployeeType(tag)
            except ValueError:
                raise UnknownVariantError(f"Unknown employee type {tag!r}") from None
        if "monthlysalary" in fields:
            return EmployeeType.FULL_TIME
        if "hourlyrate" in fields:
            return EmployeeType.PART_TIME
        raise UnknownVariantError("Employee record has no type discriminator and no pay field")

    def from_dict(self, obj: Any) -> Employee:
        if not isinstance(obj, dict):
            raise CorruptionError(f"Employee entry must be an object, got {type(obj).__name__}")
        fields = {str(k).casefold(): v for k, v in obj.items()}
        employee_type = self.resolve_type(fields)

        try:
            kwargs: Dict[str, Any] = {
                "employee_id": fields["employeeid"],
                "name": fields["name"],
                "email": fields["email"],
                "hire_date": _parse_hire_date(fields["hiredate"]),
            }
            if employee_type == EmployeeType.FULL_TIME:
                kwargs["monthly_salary"] = fields["monthlysalary"]
                kwargs["overtime_rate"] = fields.get("overtimerate", 0)
            else:
                kwargs["hourly_rate"] = fields["hourlyrate"]
        except KeyError as exc:
            raise CorruptionError(f"Employee record missing field {exc.args[0]!r}") from None

        try:
            return create_employee(employee_type, validator=self._validator, **kwargs)
        except (DomainError, TypeError, AttributeError) as exc:
            raise CorruptionError(f"Invalid employee record: {exc}") from exc

    def decode(self, text: str) -> List[Employee]:
        try:
            payload = json.loads(strip_json_extras(text), parse_float=Decimal)
        except json.JSONDecodeError as exc:
            raise CorruptionError(f"invalid JSON: {exc}") from exc
        if payload is None:
            raise CorruptionError("employee file is empty")
        if not isinstance(payload, list):
            raise CorruptionError("employee file must contain a JSON array")

        employees = [self.from_dict(obj) for obj in payload]

        ids, emails = set(), set()
        for e in employees:
            if e.employee_id.casefold() in ids:
                raise CorruptionError(f"duplicate EmployeeId {e.employee_id!r}")
            if e.email.casefold() in emails:
                raise CorruptionError(f"duplicate Email {e.email!r}")
            ids.add(e.employee_id.casefold())
            emails.add(e.email.casefold())
        return employees


class TimeRecordLineCodec:
    def encode(self, records: Sequence[TimeRecord]) -> str:
        return "".join(self.to_line(r) + "\n" for r in records)

    @staticmethod
    def to_line(record: TimeRecord) -> str:
        notes = _NEWLINES.sub(" ", record.notes or "")
        return RECORD_FIELD_SEPARATOR.join(
            [
                record.record_id,
                record.employee_id,
                format_timestamp(record.clock_in),
                format_timestamp(record.clock_out),
                notes,
            ]
        )

    @staticmethod
    def from_line(line: str, line_no: int) -> TimeRecord:
        parts = line.split(RECORD_FIELD_SEPARATOR, 4)
        if len(parts) < 5:
            raise CorruptionError(f"line {line_no}: expected 5 fields, got {len(parts)}")

        record_id, employee_id, clock_in, clock_out, notes = parts
        if not record_id.strip() or not employee_id.strip():
            raise CorruptionError(f"line {line_no}: empty record or employee id")

        try:
            opened = parse_timestamp(clock_in)
            closed = parse_timestamp(clock_out)
        except ValueError as exc:
            raise CorruptionError(f"line {line_no}: {exc}") from None
        if opened is None:
            raise CorruptionError(f"line {line_no}: clock-in cannot be NULL")

        try:
            return TimeRecord(
                record_id=record_id.strip(),
                employee_id=employee_id.strip(),
                clock_in=opened,
                clock_out=closed,
                notes=notes,
            )
        except DomainError as exc:
            raise CorruptionError(f"line {line_no}: {exc}") from exc

    def decode(self, text: str) -> List[TimeRecord]:
        records: List[TimeRecord] = []
        seen_ids = set()
        active = set()
        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            record = self.from_line(line, line_no)
            if record.record_id in seen_ids:
                raise CorruptionError(f"line {line_no}: duplicate record id {record.record_id!r}")
            if record.is_active:
                if record.employee_id in active:
                    raise CorruptionError(f"line {line_no}: second open shift for {record.employee_id!r}")
                active.add(record.employee_id)
            seen_ids.add(record.record_id)
            records.append(record)
        return records
