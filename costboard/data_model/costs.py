from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

EMPLOYEES_PAYROLL = "employeesPayroll"
OFFICE_RENT = "officeRent"
GOVERNMENT_OBLIGATIONS = "governmentObligations"
HEALTH_INSURANCE = "healthInsurance"
OFFICE_SUPPLIES = "officeSupplies"
APPS_SUBSCRIPTIONS = "appsSubscriptions"

# Categories whose value is always recomputed from another ledger.
DERIVED_COST_IDS = frozenset({APPS_SUBSCRIPTIONS})


@dataclass
class CostCategory:
    id: str
    name: str
    monthly_cost: float
    icon: str

    @property
    def derived(self) -> bool:
        return self.id in DERIVED_COST_IDS

    def to_payload(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "monthlyCost": self.monthly_cost,
            "icon": self.icon,
            "derived": self.derived,
        }


def default_cost_categories() -> List[CostCategory]:
    return [
        CostCategory(EMPLOYEES_PAYROLL, "Employees Payroll", 2500.0, "users"),
        CostCategory(OFFICE_RENT, "Office Rent", 1800.0, "building2"),
        CostCategory(GOVERNMENT_OBLIGATIONS, "Government Obligations", 1200.0, "scale"),
        CostCategory(HEALTH_INSURANCE, "Health Insurance", 850.0, "heart"),
        CostCategory(OFFICE_SUPPLIES, "Office Supplies & Bills", 450.0, "package"),
        CostCategory(APPS_SUBSCRIPTIONS, "Apps Subscriptions", 0.0, "appWindow"),
    ]


