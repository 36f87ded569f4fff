from __future__ import annotations

from typing import Iterable, List

from .base import ColumnDefinition, TableModel

OBLIGATION_STATUSES = ["pending", "paid", "overdue"]
OBLIGATION_CATEGORIES = ["tax", "license", "permit", "insurance", "other"]


def default_obligation_rows() -> List[dict[str, float | str]]:
    return [
        {
            "id": "1",
            "name": "Corporate Income Tax",
            "amount": 500.0,
            "dueDate": "2025-03-15",
            "status": "pending",
            "category": "tax",
        },
        {
            "id": "2",
            "name": "Business License Renewal",
            "amount": 300.0,
            "dueDate": "2025-04-01",
            "status": "pending",
            "category": "license",
        },
        {
            "id": "3",
            "name": "Workers Compensation",
            "amount": 400.0,
            "dueDate": "2025-03-30",
            "status": "paid",
            "category": "insurance",
        },
    ]


class ObligationTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Name"),
            ColumnDefinition(
                "amount",
                "Amount (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=50.0,
                format="%.2f",
            ),
            ColumnDefinition("dueDate", "Due Date", kind="date"),
            ColumnDefinition(
                "status",
                "Status",
                kind="select",
                default="pending",
                options=OBLIGATION_STATUSES,
            ),
            ColumnDefinition(
                "category",
                "Category",
                kind="select",
                default="tax",
                options=OBLIGATION_CATEGORIES,
            ),
        ]
        super().__init__("obligations", columns, default_obligation_rows())


def obligations_monthly_total(records: Iterable[dict]) -> float:
    return sum(float(row.get("amount", 0.0) or 0.0) for row in records)
