from __future__ import annotations

from typing import Iterable, List

from .base import ColumnDefinition, TableModel

COVERAGE_LEVELS = ["basic", "standard", "premium"]
POLICY_STATUSES = ["active", "pending", "expired"]


def default_policy_rows() -> List[dict[str, float | int | str]]:
    return [
        {
            "id": "1",
            "employeeName": "John Doe",
            "policyNumber": "HI-2025-001",
            "provider": "Blue Cross",
            "monthlyCost": 350.0,
            "coverage": "premium",
            "status": "active",
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "dependents": 2,
        },
        {
            "id": "2",
            "employeeName": "Jane Smith",
            "policyNumber": "HI-2025-002",
            "provider": "Aetna",
            "monthlyCost": 300.0,
            "coverage": "standard",
            "status": "active",
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "dependents": 1,
        },
        {
            "id": "3",
            "employeeName": "Mike Johnson",
            "policyNumber": "HI-2025-003",
            "provider": "United Health",
            "monthlyCost": 200.0,
            "coverage": "basic",
            "status": "active",
            "startDate": "2025-01-01",
            "endDate": "2025-12-31",
            "dependents": 0,
        },
    ]


class InsurancePolicyTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("employeeName", "Employee"),
            ColumnDefinition("policyNumber", "Policy Number"),
            ColumnDefinition("provider", "Provider"),
            ColumnDefinition(
                "monthlyCost",
                "Monthly Cost (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=10.0,
                format="%.2f",
            ),
            ColumnDefinition(
                "coverage",
                "Coverage",
                kind="select",
                default="basic",
                options=COVERAGE_LEVELS,
            ),
            ColumnDefinition(
                "status",
                "Status",
                kind="select",
                default="active",
                options=POLICY_STATUSES,
            ),
            ColumnDefinition("startDate", "Start Date", kind="date"),
            ColumnDefinition("endDate", "End Date", kind="date"),
            ColumnDefinition("dependents", "Dependents", kind="integer", default=0, min_value=0, step=1),
        ]
        super().__init__("insurance", columns, default_policy_rows())


def insurance_monthly_total(records: Iterable[dict]) -> float:
    return sum(float(row.get("monthlyCost", 0.0) or 0.0) for row in records)
