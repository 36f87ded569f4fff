from __future__ import annotations

from typing import Iterable, List

from .base import ColumnDefinition, TableModel

SUPPLY_CATEGORIES = ["office", "cleaning", "kitchen", "tech", "furniture", "other"]


def default_supply_rows() -> List[dict[str, float | str]]:
    return [
        {
            "id": "1",
            "name": "Printer Paper",
            "monthlyQuantity": 5.0,
            "unitCost": 5.0,
            "category": "office",
            "lastPurchased": "2025-02-15",
            "reorderPoint": 2.0,
            "monthlyBudget": 30.0,
        },
        {
            "id": "2",
            "name": "Coffee Supplies",
            "monthlyQuantity": 10.0,
            "unitCost": 2.0,
            "category": "kitchen",
            "lastPurchased": "2025-02-20",
            "reorderPoint": 3.0,
            "monthlyBudget": 25.0,
        },
        {
            "id": "3",
            "name": "Cleaning Supplies",
            "monthlyQuantity": 8.0,
            "unitCost": 3.0,
            "category": "cleaning",
            "lastPurchased": "2025-02-10",
            "reorderPoint": 2.0,
            "monthlyBudget": 30.0,
        },
    ]


class SupplyTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Name"),
            ColumnDefinition(
                "monthlyQuantity",
                "Monthly Quantity",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=1.0,
            ),
            ColumnDefinition(
                "unitCost",
                "Unit Cost (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=0.5,
                format="%.2f",
            ),
            ColumnDefinition(
                "category",
                "Category",
                kind="select",
                default="office",
                options=SUPPLY_CATEGORIES,
            ),
            ColumnDefinition("lastPurchased", "Last Purchased", kind="date"),
            ColumnDefinition("reorderPoint", "Reorder Point", kind="number", default=0.0, min_value=0.0, step=1.0),
            ColumnDefinition(
                "monthlyBudget",
                "Monthly Budget (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=5.0,
                format="%.2f",
            ),
        ]
        super().__init__("supplies", columns, default_supply_rows())


def supply_monthly_cost(row: dict) -> float:
    quantity = float(row.get("monthlyQuantity", 0.0) or 0.0)
    unit_cost = float(row.get("unitCost", 0.0) or 0.0)
    return quantity * unit_cost


def supplies_monthly_total(records: Iterable[dict]) -> float:
    return sum(supply_monthly_cost(row) for row in records)
