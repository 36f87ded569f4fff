from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any, Dict

from ..errors import ValidationError
from .base import ColumnDefinition, TableModel

PROJECT_STATUSES = ["active", "completed", "cancelled"]
DEFAULT_ALLOCATION_PERCENTAGE = 20.0


class ProjectTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Project Name"),
            ColumnDefinition("description", "Description"),
            ColumnDefinition("startDate", "Start Date", kind="date"),
            ColumnDefinition("endDate", "End Date", kind="date", help="Must be after the start date"),
            ColumnDefinition(
                "status",
                "Status",
                kind="select",
                default="active",
                options=PROJECT_STATUSES,
            ),
            ColumnDefinition(
                "overheadAllocationPercentage",
                "Overhead Allocation (%)",
                kind="number",
                default=DEFAULT_ALLOCATION_PERCENTAGE,
                min_value=0.0,
                step=1.0,
                format="%.2f",
            ),
            ColumnDefinition(
                "price",
                "Project Price (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=100.0,
                format="%.2f",
            ),
        ]
        super().__init__("projects", columns, [])


def parse_iso_date(value: Any, field: str) -> datetime.date:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    text = str(value or "").strip()
    if not text:
        raise ValidationError(f"{field} is required.")
    try:
        return datetime.date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD).") from None


def validate_date_range(start: datetime.date, end: datetime.date) -> None:
    if end <= start:
        raise ValidationError("End date must be after start date.")


@dataclass
class Project:
    id: str
    name: str
    description: str
    start_date: datetime.date
    end_date: datetime.date
    status: str = "active"
    overhead_allocation_percentage: float = DEFAULT_ALLOCATION_PERCENTAGE
    price: float = 0.0

    def is_active(self, today: datetime.date) -> bool:
        return self.status == "active" and self.end_date > today

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Project":
        """Builds a project from a persisted (snake_case) row."""
        return cls(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            description=str(row.get("description") or ""),
            start_date=parse_iso_date(row.get("start_date"), "start_date"),
            end_date=parse_iso_date(row.get("end_date"), "end_date"),
            status=str(row.get("status") or "active"),
            overhead_allocation_percentage=float(row.get("overhead_allocation_percentage") or 0.0),
            price=float(row.get("price") or 0.0),
        )


def project_form_to_row(form: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """Converts a camelCase project form into a persisted snake_case row.

    Dates are validated; end date must be strictly after start date. With
    ``partial`` only the submitted fields are returned and the date check is
    left to the caller, which knows the stored counterpart.
    """
    clean = ProjectTableModel().coerce(form, partial=partial)
    row: Dict[str, Any] = {}
    if "name" in clean:
        row["name"] = clean["name"].strip()
    if "description" in clean:
        row["description"] = clean["description"]
    if "startDate" in form or not partial:
        row["start_date"] = parse_iso_date(form.get("startDate"), "startDate").isoformat()
    if "endDate" in form or not partial:
        row["end_date"] = parse_iso_date(form.get("endDate"), "endDate").isoformat()
    if "status" in clean:
        row["status"] = clean["status"]
    if "overheadAllocationPercentage" in clean:
        row["overhead_allocation_percentage"] = clean["overheadAllocationPercentage"]
    if "price" in clean:
        row["price"] = clean["price"]
    if not partial:
        validate_date_range(
            datetime.date.fromisoformat(row["start_date"]),
            datetime.date.fromisoformat(row["end_date"]),
        )
    return row
