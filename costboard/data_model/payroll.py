from __future__ import annotations

from typing import Iterable, List

from .base import ColumnDefinition, TableModel

EMPLOYEE_STATUSES = ["active", "on-leave", "terminated"]


def default_employee_rows() -> List[dict[str, float | str]]:
    return [
        {
            "id": "1",
            "name": "John Doe",
            "position": "Senior Developer",
            "department": "Engineering",
            "salary": 8000.0,
            "startDate": "2024-01-15",
            "status": "active",
        },
        {
            "id": "2",
            "name": "Jane Smith",
            "position": "Product Manager",
            "department": "Product",
            "salary": 7500.0,
            "startDate": "2024-02-01",
            "status": "active",
        },
        {
            "id": "3",
            "name": "Mike Johnson",
            "position": "UI Designer",
            "department": "Design",
            "salary": 6000.0,
            "startDate": "2024-01-20",
            "status": "on-leave",
        },
    ]


class EmployeeTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Name"),
            ColumnDefinition("position", "Position"),
            ColumnDefinition("department", "Department"),
            ColumnDefinition(
                "salary",
                "Monthly Salary (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=100.0,
                format="%.2f",
            ),
            ColumnDefinition("startDate", "Start Date", kind="date"),
            ColumnDefinition(
                "status",
                "Status",
                kind="select",
                default="active",
                options=EMPLOYEE_STATUSES,
            ),
        ]
        super().__init__("employees", columns, default_employee_rows())


def payroll_monthly_total(records: Iterable[dict]) -> float:
    # Every employee counts, whatever the status.
    return sum(float(row.get("salary", 0.0) or 0.0) for row in records)
