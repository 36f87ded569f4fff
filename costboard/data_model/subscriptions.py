from __future__ import annotations

from typing import Iterable, List

from .base import ColumnDefinition, TableModel

SUBSCRIPTION_CATEGORIES = ["development", "design", "marketing", "productivity", "other"]
BILLING_CYCLES = ["monthly", "annually"]


def default_subscription_rows() -> List[dict[str, float | str]]:
    return [
        {
            "id": "1",
            "name": "GitHub Team",
            "description": "Code hosting and collaboration platform",
            "monthlyCost": 40.0,
            "billingCycle": "monthly",
            "category": "development",
            "website": "https://github.com",
            "renewalDate": "2025-03-15",
        },
        {
            "id": "2",
            "name": "Figma Professional",
            "description": "Design and prototyping tool",
            "monthlyCost": 15.0,
            "billingCycle": "monthly",
            "category": "design",
            "website": "https://figma.com",
            "renewalDate": "2025-03-20",
        },
        {
            "id": "3",
            "name": "Notion Team",
            "description": "Team wiki and project management",
            "monthlyCost": 10.0,
            "billingCycle": "monthly",
            "category": "productivity",
            "website": "https://notion.so",
            "renewalDate": "2025-03-25",
        },
    ]


class SubscriptionTableModel(TableModel):
    def __init__(self) -> None:
        columns = [
            ColumnDefinition("name", "Name"),
            ColumnDefinition("description", "Description"),
            ColumnDefinition(
                "monthlyCost",
                "Monthly Cost (USD)",
                kind="number",
                default=0.0,
                min_value=0.0,
                step=1.0,
                format="%.2f",
            ),
            ColumnDefinition(
                "billingCycle",
                "Billing Cycle",
                kind="select",
                default="monthly",
                options=BILLING_CYCLES,
            ),
            ColumnDefinition(
                "category",
                "Category",
                kind="select",
                default="other",
                options=SUBSCRIPTION_CATEGORIES,
            ),
            ColumnDefinition("website", "Website"),
            ColumnDefinition("renewalDate", "Renewal Date", kind="date"),
        ]
        super().__init__("subscriptions", columns, default_subscription_rows())


def subscriptions_monthly_total(records: Iterable[dict]) -> float:
    return sum(float(row.get("monthlyCost", 0.0) or 0.0) for row in records)
