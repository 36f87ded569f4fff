"""Application root: builds every ledger once and keeps cost totals in step."""

from __future__ import annotations

import datetime
import logging
from typing import Any, Callable, Dict

from .config import Settings
from .data_model import (
    APPS_SUBSCRIPTIONS,
    EMPLOYEES_PAYROLL,
    GOVERNMENT_OBLIGATIONS,
    HEALTH_INSURANCE,
    OFFICE_RENT,
    OFFICE_SUPPLIES,
    EmployeeTableModel,
    InsurancePolicyTableModel,
    ObligationTableModel,
    SubscriptionTableModel,
    SupplyTableModel,
    insurance_monthly_total,
    obligations_monthly_total,
    payroll_monthly_total,
    rent_monthly_total,
    subscriptions_monthly_total,
    supplies_monthly_total,
)
from .engine.ledgers import CostLedger, KeyValueStore, OfficeRentLedger, RecordLedger
from .engine.projects import ProjectLedger
from .engine.storage import JsonKeyValueStore
from .errors import RecordNotFoundError
from .persistence import IdentityProvider, ProjectStore, SqliteProjectStore, StaticIdentity

logger = logging.getLogger(__name__)

# Cost category fed by each record ledger's monthly total.
COST_TARGETS = {
    "subscriptions": APPS_SUBSCRIPTIONS,
    "employees": EMPLOYEES_PAYROLL,
    "obligations": GOVERNMENT_OBLIGATIONS,
    "supplies": OFFICE_SUPPLIES,
    "insurance": HEALTH_INSURANCE,
    "office-rent": OFFICE_RENT,
}


class Workspace:
    def __init__(
        self,
        store: KeyValueStore,
        project_store: ProjectStore,
        identity: IdentityProvider,
        seed: bool = True,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.costs = CostLedger(store, seed=seed)
        self.subscriptions = RecordLedger(SubscriptionTableModel(), store, subscriptions_monthly_total, seed=seed)
        self.employees = RecordLedger(EmployeeTableModel(), store, payroll_monthly_total, seed=seed)
        self.obligations = RecordLedger(ObligationTableModel(), store, obligations_monthly_total, seed=seed)
        self.supplies = RecordLedger(SupplyTableModel(), store, supplies_monthly_total, seed=seed)
        self.insurance = RecordLedger(InsurancePolicyTableModel(), store, insurance_monthly_total, seed=seed)
        self.office_rent = OfficeRentLedger(store, rent_monthly_total, seed=seed)
        self.projects = ProjectLedger(project_store, identity, today=today)
        self.recompute_derived_costs()

    @classmethod
    def from_settings(cls, settings: Settings, identity: IdentityProvider | None = None) -> "Workspace":
        return cls(
            store=JsonKeyValueStore(settings.data_dir),
            project_store=SqliteProjectStore(settings.db_path),
            identity=identity or StaticIdentity(settings.default_user),
            seed=settings.seed,
        )

    @property
    def record_ledgers(self) -> Dict[str, RecordLedger]:
        return {
            "subscriptions": self.subscriptions,
            "employees": self.employees,
            "obligations": self.obligations,
            "supplies": self.supplies,
            "insurance": self.insurance,
            "office-rent": self.office_rent,
        }

    def ledger(self, kind: str) -> RecordLedger:
        try:
            return self.record_ledgers[kind]
        except KeyError:
            raise RecordNotFoundError(f"Unknown ledger {kind!r}") from None

    def recompute_derived_costs(self) -> None:
        self.costs.set_derived(APPS_SUBSCRIPTIONS, self.subscriptions.monthly_total())

    def sync_costs(self, kind: str) -> None:
        """Pushes one ledger's monthly total into its cost category."""
        if kind == "subscriptions":
            self.recompute_derived_costs()
            return
        total = self.ledger(kind).monthly_total()
        self.costs.update_cost(COST_TARGETS[kind], total)
        logger.debug("Synced %s total %.2f into %s", kind, total, COST_TARGETS[kind])

    def monthly_overhead(self) -> float:
        return self.costs.total_monthly()

    def add_record(self, kind: str, record: Dict[str, Any]) -> Dict[str, Any]:
        row = self.ledger(kind).add(record)
        self.sync_costs(kind)
        return row

    def update_record(self, kind: str, record_id: str, partial: Dict[str, Any]) -> Dict[str, Any] | None:
        row = self.ledger(kind).update(record_id, partial)
        if row is not None:
            self.sync_costs(kind)
        return row

    def delete_record(self, kind: str, record_id: str) -> bool:
        deleted = self.ledger(kind).delete(record_id)
        if deleted:
            self.sync_costs(kind)
        return deleted

    def add_rent_expense(self, branch_id: str, expense: Dict[str, Any]) -> Dict[str, Any] | None:
        row = self.office_rent.add_expense(branch_id, expense)
        if row is not None:
            self.sync_costs("office-rent")
        return row

    def update_rent_expense(self, branch_id: str, expense_id: str, partial: Dict[str, Any]) -> Dict[str, Any] | None:
        row = self.office_rent.update_expense(branch_id, expense_id, partial)
        if row is not None:
            self.sync_costs("office-rent")
        return row

    def delete_rent_expense(self, branch_id: str, expense_id: str) -> bool:
        deleted = self.office_rent.delete_expense(branch_id, expense_id)
        if deleted:
            self.sync_costs("office-rent")
        return deleted
