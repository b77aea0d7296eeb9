"""Field projection and CSV / JSON / XLSX serialization of employee records."""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from dashboard.models.employee import Employee
from dashboard.models.export import ExportFieldInfo, ExportValue
from dashboard.services.filter_engine import get_experience_level

logger = logging.getLogger(__name__)

DEFAULT_FILENAME_PREFIX = "employees"
DEFAULT_PREVIEW_ROWS = 5
SHEET_NAME = "Employees"
MIN_COLUMN_WIDTH = 15
LIST_SEPARATOR = "; "


class ExportError(Exception):
    pass


class NoDataError(ExportError):
    def __init__(self) -> None:
        super().__init__("No data to export")


class NoFieldsSelectedError(ExportError):
    def __init__(self) -> None:
        super().__init__("No fields selected for export")


class UnsupportedFormatError(ExportError):
    def __init__(self, fmt: object) -> None:
        super().__init__(f"Unsupported export format: {fmt}")


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    XLSX = "xlsx"
    EXCEL = "excel"

    @property
    def extension(self) -> str:
        return "xlsx" if self is ExportFormat.EXCEL else self.value


MEDIA_TYPES: dict[str, str] = {
    "csv": "text/csv; charset=utf-8",
    "json": "application/json; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


@dataclass(frozen=True)
class ExportFieldDescriptor:
    key: str
    label: str
    get_value: Callable[[Employee], ExportValue]

    def info(self) -> ExportFieldInfo:
        return ExportFieldInfo(key=self.key, label=self.label)


@dataclass(frozen=True)
class ExportDocument:
    filename: str
    media_type: str
    content: bytes
    record_count: int


def _number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


EXPORT_FIELDS: list[ExportFieldDescriptor] = [
    ExportFieldDescriptor("firstName", "First Name", lambda e: e.first_name),
    ExportFieldDescriptor("lastName", "Last Name", lambda e: e.last_name),
    ExportFieldDescriptor("fullName", "Full Name", lambda e: e.full_name),
    ExportFieldDescriptor("email", "Email", lambda e: e.email),
    ExportFieldDescriptor("roleTitle", "Role Title", lambda e: e.role.title),
    ExportFieldDescriptor("roleLevel", "Role Level", lambda e: e.role.level.value),
    ExportFieldDescriptor("roleCategory", "Role Category", lambda e: e.role.category.value),
    ExportFieldDescriptor("department", "Department", lambda e: e.department.name),
    ExportFieldDescriptor("experienceYears", "Experience (Years)", lambda e: e.experience_years),
    ExportFieldDescriptor(
        "experienceLevel", "Experience Level", lambda e: get_experience_level(e.experience_years)
    ),
    ExportFieldDescriptor("salary", "Salary", lambda e: _number(e.salary)),
    ExportFieldDescriptor("location", "Location", lambda e: e.location),
    ExportFieldDescriptor("startDate", "Start Date", lambda e: e.start_date.isoformat()),
    ExportFieldDescriptor("performanceRating", "Performance Rating", lambda e: _number(e.performance_rating)),
    ExportFieldDescriptor("isActive", "Status", lambda e: "Active" if e.is_active else "Inactive"),
    ExportFieldDescriptor("specialization", "Specializations", lambda e: LIST_SEPARATOR.join(e.specialization)),
    ExportFieldDescriptor("skills", "Skills", lambda e: LIST_SEPARATOR.join(s.name for s in e.skills)),
    ExportFieldDescriptor("skillCount", "Skill Count", lambda e: len(e.skills)),
]

_FIELDS_BY_KEY: dict[str, ExportFieldDescriptor] = {f.key: f for f in EXPORT_FIELDS}

DEFAULT_EXPORT_FIELDS: list[str] = [
    "fullName",
    "email",
    "roleTitle",
    "department",
    "experienceYears",
    "salary",
    "location",
    "startDate",
    "isActive",
]

FIELD_CATEGORIES: dict[str, list[str]] = {
    "basic": ["firstName", "lastName", "fullName", "email"],
    "role": ["roleTitle", "roleLevel", "roleCategory", "department"],
    "experience": ["experienceYears", "experienceLevel", "performanceRating"],
    "employment": ["salary", "location", "startDate", "isActive"],
    "skills": ["specialization", "skills", "skillCount"],
}


def get_fields_by_category() -> dict[str, list[ExportFieldDescriptor]]:
    return {name: resolve_fields(keys) for name, keys in FIELD_CATEGORIES.items()}


def resolve_fields(field_keys: Sequence[str]) -> list[ExportFieldDescriptor]:
    """Descriptors for the requested keys in catalogue order; unknown keys are dropped."""
    wanted = set(field_keys)
    return [f for f in EXPORT_FIELDS if f.key in wanted]


def parse_format(fmt: str | ExportFormat) -> ExportFormat:
    if isinstance(fmt, ExportFormat):
        return fmt
    try:
        return ExportFormat(str(fmt).strip().lower())
    except ValueError as e:
        raise UnsupportedFormatError(fmt) from e


def project_rows(
    employees: Sequence[Employee],
    fields: Sequence[ExportFieldDescriptor],
    *,
    by_label: bool = False,
) -> list[dict[str, ExportValue]]:
    return [
        {(f.label if by_label else f.key): f.get_value(emp) for f in fields}
        for emp in employees
    ]


def generate_filename(fmt: ExportFormat, now: datetime, prefix: str = DEFAULT_FILENAME_PREFIX) -> str:
    timestamp = now.isoformat()[:19].replace(":", "-").replace(".", "-")
    return f"{prefix}_{timestamp}.{fmt.extension}"


def _csv_text(value: ExportValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_csv(employees: Sequence[Employee], fields: Sequence[ExportFieldDescriptor]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([f.label for f in fields])
    for emp in employees:
        writer.writerow([_csv_text(f.get_value(emp)) for f in fields])
    return buffer.getvalue().rstrip("\n")


def to_json(
    employees: Sequence[Employee],
    fields: Sequence[ExportFieldDescriptor],
    now: datetime,
) -> str:
    document = {
        "exportDate": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "totalRecords": len(employees),
        "fields": [f.info().model_dump() for f in fields],
        "data": project_rows(employees, fields),
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


def _write_row(ws: Worksheet, row_idx: int, values: Sequence[ExportValue]) -> None:
    """Strings are always written as text cells, never as formulas."""
    for col_idx, value in enumerate(values, start=1):
        if isinstance(value, str):
            cell = ws.cell(row=row_idx, column=col_idx, value=ILLEGAL_CHARACTERS_RE.sub("", value))
            cell.data_type = "s"
        else:
            ws.cell(row=row_idx, column=col_idx, value=value)


def to_xlsx(employees: Sequence[Employee], fields: Sequence[ExportFieldDescriptor]) -> bytes:
    workbook = Workbook()
    ws = workbook.active
    ws.title = SHEET_NAME

    _write_row(ws, 1, [f.label for f in fields])
    for row_idx, row in enumerate(project_rows(employees, fields, by_label=True), start=2):
        _write_row(ws, row_idx, [row[f.label] for f in fields])

    for idx, f in enumerate(fields, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = max(len(f.label), MIN_COLUMN_WIDTH)

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def export_data(
    employees: Sequence[Employee],
    fmt: str | ExportFormat,
    field_keys: Sequence[str],
    *,
    now: datetime | None = None,
    prefix: str = DEFAULT_FILENAME_PREFIX,
) -> ExportDocument:
    """Build a complete export document; raises :class:`ExportError` before producing any bytes."""
    if not employees:
        raise NoDataError()
    if not field_keys:
        raise NoFieldsSelectedError()

    export_format = parse_format(fmt)
    fields = resolve_fields(field_keys)
    if not fields:
        raise NoFieldsSelectedError()

    now = now or datetime.now(timezone.utc)

    if export_format is ExportFormat.CSV:
        content = to_csv(employees, fields).encode("utf-8")
    elif export_format is ExportFormat.JSON:
        content = to_json(employees, fields, now).encode("utf-8")
    else:
        content = to_xlsx(employees, fields)

    document = ExportDocument(
        filename=generate_filename(export_format, now, prefix),
        media_type=MEDIA_TYPES[export_format.extension],
        content=content,
        record_count=len(employees),
    )
    logger.info(
        "Exported %d records as %s (%d fields, %d bytes)",
        document.record_count,
        export_format.extension,
        len(fields),
        len(content),
    )
    return document


def get_export_preview(
    employees: Sequence[Employee],
    field_keys: Sequence[str],
    max_rows: int = DEFAULT_PREVIEW_ROWS,
) -> list[dict[str, ExportValue]]:
    fields = resolve_fields(field_keys)
    return project_rows(employees[: max(max_rows, 0)], fields, by_label=True)
