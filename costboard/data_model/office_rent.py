from __future__ import annotations

from typing import Iterable, List

from .base import ColumnDefinition, TableModel

EXPENSE_CATEGORIES = ["rent", "utilities", "maintenance", "security", "other"]
EXPENSE_STATUSES = ["paid", "pending", "overdue"]

# Divisor applied to an annual amount for each billing period.
RENT_PERIODS = {
    "monthly": 12.0,
    "quarterly": 4.0,
    "semi-annually": 2.0,
    "annually": 1.0,
}


def default_branch_rows() -> List[dict]:
    return [
        {
            "id": "1",
            "name": "Main Office",
            "location": "Downtown",
            "expenses": [
                {
                    "id": "1",
                    "name": "Annual Office Rent",
                    "annualAmount": 18000.0,
                    "dueDate": "2025-03-01",
                    "category": "rent",
                    "status": "pending",
                    "notes": "Main office space annual rent",
                },
                {
                    "id": "2",
                    "name": "Annual Electricity",
                    "annualAmount": 2400.0,
                    "dueDate": "2025-03-05",
                    "category": "utilities",
                    "status": "pending",
                    "notes": "Annual electricity charges",
                },
            ],
        },
        {
            "id": "2",
            "name": "Branch Office",
            "location": "Suburb Area",
            "expenses": [
                {
                    "id": "3",
                    "name": "Annual Office Rent",
                    "annualAmount": 12000.0,
                    "dueDate": "2025-03-01",
                    "category": "rent",
                    "status": "pending",
                    "notes": "Branch office annual rent",
                },
                {
                    "id": "4",
                    "name": "Annual Utilities",
                    "annualAmount": 1800.0,
                    "dueDate": "2025-03-05",
                    "category": "utilities",
                    "status": "pending",
                    "notes": "Branch utilities",
                },
            ],
        },
    ]


class BranchTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Branch Name"),
            ColumnDefinition("location", "Location"),
        ]
        super().__init__("office-rent", columns, default_branch_rows())


class RentExpenseTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Name"),
            ColumnDefinition(
                "annualAmount",
                "Annual Amount (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=100.0,
                format="%.2f",
            ),
            ColumnDefinition("dueDate", "Due Date", kind="date"),
            ColumnDefinition(
                "category",
                "Category",
                kind="select",
                default="rent",
                options=EXPENSE_CATEGORIES,
            ),
            ColumnDefinition(
                "status",
                "Status",
                kind="select",
                default="pending",
                options=EXPENSE_STATUSES,
            ),
            ColumnDefinition("notes", "Notes"),
        ]
        super().__init__("rent-expenses", columns, [])


def period_cost(annual_amount: float, period: str) -> float:
    """Converts an annual amount into the cost of one billing period.

    Unknown periods return the annual amount unchanged.
    """
    return annual_amount / RENT_PERIODS.get(period, 1.0)


def branch_annual_total(branch: dict) -> float:
    return sum(float(exp.get("annualAmount", 0.0) or 0.0) for exp in branch.get("expenses") or [])


def rent_annual_total(branches: Iterable[dict]) -> float:
    return sum(branch_annual_total(branch) for branch in branches)


def rent_monthly_total(branches: Iterable[dict]) -> float:
    return rent_annual_total(branches) / 12.0
