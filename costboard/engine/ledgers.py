# engine/ledgers.py
from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Protocol

from ..data_model import (
    BranchTableModel,
    CostCategory,
    DERIVED_COST_IDS,
    RentExpenseTableModel,
    TableModel,
    default_cost_categories,
)
from ..data_model.base import to_float

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def load(self, name: str) -> List[dict] | None: ...

    def save(self, name: str, records: List[dict]) -> None: ...


def new_record_id() -> str:
    return uuid.uuid4().hex


def store_name_for(name: str) -> str:
    return f"{name}-storage"


class CostLedger:
    """The fixed set of monthly cost categories."""

    store_name = store_name_for("costs")

    def __init__(self, store: KeyValueStore, seed: bool = True):
        self.store = store
        self.costs: List[CostCategory] = default_cost_categories()
        if not seed:
            for cost in self.costs:
                cost.monthly_cost = 0.0
        stored = {str(row.get("id")): row for row in store.load(self.store_name) or []}
        for cost in self.costs:
            if cost.id in stored and not cost.derived:
                cost.monthly_cost = to_float(stored[cost.id].get("monthlyCost"))

    def list_costs(self) -> List[CostCategory]:
        return [replace(cost) for cost in self.costs]

    def get(self, cost_id: str) -> CostCategory | None:
        for cost in self.costs:
            if cost.id == cost_id:
                return replace(cost)
        return None

    def update_cost(self, cost_id: str, monthly_cost: Any) -> bool:
        """Stores a new monthly value. Unknown and derived ids are ignored."""
        if cost_id in DERIVED_COST_IDS:
            logger.debug("Ignoring update of derived cost %s", cost_id)
            return False
        for cost in self.costs:
            if cost.id == cost_id:
                cost.monthly_cost = to_float(monthly_cost)
                self._save()
                return True
        return False

    def set_derived(self, cost_id: str, monthly_cost: float) -> None:
        if cost_id not in DERIVED_COST_IDS:
            raise KeyError(f"{cost_id} is not a derived cost category")
        for cost in self.costs:
            if cost.id == cost_id:
                cost.monthly_cost = float(monthly_cost)

    def total_monthly(self) -> float:
        return sum(cost.monthly_cost for cost in self.costs)

    def _save(self) -> None:
        # Derived categories hold no value of their own.
        rows = [cost.to_payload() for cost in self.costs if not cost.derived]
        self.store.save(self.store_name, rows)


class RecordLedger:
    """Create/update/delete over one record set, written back on every change."""

    def __init__(
        self,
        model: TableModel,
        store: KeyValueStore,
        total: Callable[[Iterable[dict]], float],
        seed: bool = True,
    ):
        self.model = model
        self.store = store
        self.total = total
        self.store_name = store_name_for(model.name)
        stored = store.load(self.store_name)
        if stored is None:
            stored = copy.deepcopy(model.default_rows) if seed else []
        self.records: List[Dict[str, Any]] = stored

    @property
    def name(self) -> str:
        return self.model.name

    def list(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.records)

    def get(self, record_id: str) -> Dict[str, Any] | None:
        for row in self.records:
            if row.get("id") == record_id:
                return copy.deepcopy(row)
        return None

    def add(self, record: Dict[str, Any]) -> Dict[str, Any]:
        row = self._prepare_new(record)
        row["id"] = new_record_id()
        self.records.append(row)
        self._save()
        logger.debug("Added %s record %s", self.name, row["id"])
        return copy.deepcopy(row)

    def update(self, record_id: str, partial: Dict[str, Any]) -> Dict[str, Any] | None:
        changes = self.model.coerce(partial, partial=True)
        for row in self.records:
            if row.get("id") == record_id:
                row.update(changes)
                self._save()
                logger.debug("Updated %s record %s", self.name, record_id)
                return copy.deepcopy(row)
        return None

    def delete(self, record_id: str) -> bool:
        remaining = [row for row in self.records if row.get("id") != record_id]
        if len(remaining) == len(self.records):
            return False
        self.records = remaining
        self._save()
        logger.debug("Deleted %s record %s", self.name, record_id)
        return True

    def monthly_total(self) -> float:
        return self.total(self.records)

    def _prepare_new(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return self.model.coerce(record)

    def _save(self) -> None:
        self.store.save(self.store_name, self.records)


class OfficeRentLedger(RecordLedger):
    """Branches, each owning a list of annual rent expenses."""

    def __init__(
        self,
        store: KeyValueStore,
        total: Callable[[Iterable[dict]], float],
        seed: bool = True,
    ):
        super().__init__(BranchTableModel(), store, total, seed=seed)
        self.expense_model = RentExpenseTableModel()

    def _prepare_new(self, record: Dict[str, Any]) -> Dict[str, Any]:
        row = self.model.coerce(record)
        row["expenses"] = [self._new_expense(exp) for exp in record.get("expenses") or []]
        return row

    def _new_expense(self, expense: Dict[str, Any]) -> Dict[str, Any]:
        row = self.expense_model.coerce(expense)
        row["id"] = new_record_id()
        return row

    def _branch(self, branch_id: str) -> Dict[str, Any] | None:
        for row in self.records:
            if row.get("id") == branch_id:
                return row
        return None

    def add_expense(self, branch_id: str, expense: Dict[str, Any]) -> Dict[str, Any] | None:
        branch = self._branch(branch_id)
        if branch is None:
            return None
        row = self._new_expense(expense)
        branch.setdefault("expenses", []).append(row)
        self._save()
        return copy.deepcopy(row)

    def update_expense(
        self, branch_id: str, expense_id: str, partial: Dict[str, Any]
    ) -> Dict[str, Any] | None:
        branch = self._branch(branch_id)
        if branch is None:
            return None
        changes = self.expense_model.coerce(partial, partial=True)
        for row in branch.get("expenses") or []:
            if row.get("id") == expense_id:
                row.update(changes)
                self._save()
                return copy.deepcopy(row)
        return None

    def delete_expense(self, branch_id: str, expense_id: str) -> bool:
        branch = self._branch(branch_id)
        if branch is None:
            return False
        expenses = branch.get("expenses") or []
        remaining = [row for row in expenses if row.get("id") != expense_id]
        if len(remaining) == len(expenses):
            return False
        branch["expenses"] = remaining
        self._save()
        return True
