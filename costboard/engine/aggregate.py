from __future__ import annotations

from typing import Any, Dict, Iterable, List

import pandas as pd

from ..data_model import (
    CostCategory,
    RENT_PERIODS,
    branch_annual_total,
    period_cost,
)
from ..data_model.obligations import OBLIGATION_STATUSES
from .allocator import DASHBOARD_PERIODS, convert_monthly


def _frame(records: Iterable[dict], numeric: Dict[str, float]) -> pd.DataFrame:
    """Builds a frame guaranteed to carry the numeric columns, NaN-free."""
    df = pd.DataFrame(list(records))
    for column, default in numeric.items():
        if column not in df.columns:
            df[column] = default
        df[column] = pd.to_numeric(df[column], errors="coerce").fillna(default)
    return df


def _records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Rows as plain dicts; fields missing from a record come back as None."""
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")


def cost_breakdown(costs: List[CostCategory], period: str = "monthly") -> pd.DataFrame:
    """Per-category value for ``period`` with its share of the monthly total."""
    period = (period or "monthly").lower()
    df = pd.DataFrame([cost.to_payload() for cost in costs])
    if df.empty:
        return df
    total = float(df["monthlyCost"].sum())
    df["currentValue"] = df["monthlyCost"].apply(lambda value: convert_monthly(value, period))
    if total:
        df["percentage"] = (df["monthlyCost"] / total * 100).round().astype(int)
    else:
        df["percentage"] = 0
    return df.sort_values("currentValue", ascending=False, kind="stable").reset_index(drop=True)


def period_totals(total_monthly: float) -> Dict[str, float]:
    return {period: convert_monthly(total_monthly, period) for period in DASHBOARD_PERIODS}


def dashboard_summary(costs: List[CostCategory], period: str = "monthly") -> Dict[str, Any]:
    breakdown = cost_breakdown(costs, period)
    total = sum(cost.monthly_cost for cost in costs)
    return {
        "period": period,
        "totalMonthly": total,
        "totals": period_totals(total),
        "costs": _records(breakdown),
    }


def subscriptions_summary(records: List[dict]) -> Dict[str, Any]:
    df = _frame(records, {"monthlyCost": 0.0})
    monthly = float(df["monthlyCost"].sum()) if not df.empty else 0.0
    by_category: Dict[str, float] = {}
    if not df.empty and "category" in df.columns:
        by_category = {str(k): float(v) for k, v in df.groupby("category")["monthlyCost"].sum().items()}
    return {
        "count": len(df),
        "totalMonthly": monthly,
        "totalAnnual": monthly * 12,
        "byCategory": by_category,
    }


def payroll_summary(records: List[dict]) -> Dict[str, Any]:
    df = _frame(records, {"salary": 0.0})
    total = float(df["salary"].sum()) if not df.empty else 0.0
    by_status: Dict[str, int] = {}
    if not df.empty and "status" in df.columns:
        by_status = {str(k): int(v) for k, v in df["status"].value_counts().items()}
    return {
        "count": len(df),
        "totalMonthly": total,
        "averageSalary": total / len(df) if len(df) else 0.0,
        "byStatus": by_status,
    }


def obligations_summary(records: List[dict]) -> Dict[str, Any]:
    df = _frame(records, {"amount": 0.0})
    by_status = {status: 0.0 for status in OBLIGATION_STATUSES}
    if not df.empty and "status" in df.columns:
        for status, amount in df.groupby("status")["amount"].sum().items():
            by_status[str(status)] = float(amount)
    return {
        "count": len(df),
        "totalMonthly": float(df["amount"].sum()) if not df.empty else 0.0,
        "byStatus": by_status,
    }


def supplies_summary(records: List[dict]) -> Dict[str, Any]:
    df = _frame(records, {"monthlyQuantity": 0.0, "unitCost": 0.0, "reorderPoint": 0.0, "monthlyBudget": 0.0})
    if df.empty:
        return {
            "count": 0,
            "totalMonthly": 0.0,
            "totalBudget": 0.0,
            "budgetVariance": 0.0,
            "lowStock": [],
            "overBudget": [],
        }
    df["monthlyCost"] = df["monthlyQuantity"] * df["unitCost"]
    total = float(df["monthlyCost"].sum())
    budget = float(df["monthlyBudget"].sum())
    low_stock = df[df["monthlyQuantity"] <= df["reorderPoint"]]
    over_budget = df[df["monthlyCost"] > df["monthlyBudget"]]
    return {
        "count": len(df),
        "totalMonthly": total,
        "totalBudget": budget,
        # Positive means over budget.
        "budgetVariance": total - budget,
        "lowStock": _records(low_stock),
        "overBudget": _records(over_budget),
    }


def insurance_summary(records: List[dict]) -> Dict[str, Any]:
    df = _frame(records, {"monthlyCost": 0.0, "dependents": 0})
    total = float(df["monthlyCost"].sum()) if not df.empty else 0.0
    return {
        "count": len(df),
        "totalMonthly": total,
        "totalDependents": int(df["dependents"].sum()) if not df.empty else 0,
        "averageCost": total / len(df) if len(df) else 0.0,
    }


def rent_summary(branches: List[dict], period: str = "monthly") -> Dict[str, Any]:
    rows = []
    for branch in branches:
        annual = branch_annual_total(branch)
        rows.append(
            {
                "id": branch.get("id"),
                "name": branch.get("name", ""),
                "location": branch.get("location", ""),
                "expenseCount": len(branch.get("expenses") or []),
                "totalAnnual": annual,
                "monthlyAverage": annual / 12.0,
                "periodCost": period_cost(annual, period),
            }
        )
    total_annual = sum(row["totalAnnual"] for row in rows)
    return {
        "period": period,
        "totalAnnual": total_annual,
        "totalMonthly": total_annual / 12.0,
        "periodCost": period_cost(total_annual, period),
        "periods": {name: period_cost(total_annual, name) for name in RENT_PERIODS},
        "branches": rows,
    }
