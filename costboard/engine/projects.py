# engine/projects.py
from __future__ import annotations

import datetime
import logging
from typing import Any, Callable, Dict, List

from ..data_model import (
    DEFAULT_ALLOCATION_PERCENTAGE,
    Project,
    parse_iso_date,
    project_form_to_row,
    validate_date_range,
)
from ..errors import CostboardError, NotAuthenticatedError
from ..persistence import IdentityProvider, ProjectStore
from .allocator import (
    AllocationResult,
    DurationMetrics,
    allocated_overhead,
    auto_allocation,
    duration_metrics,
    profit_margin,
    project_price,
    weekly_cost_series,
    weekly_overhead,
)

logger = logging.getLogger(__name__)


class ProjectLedger:
    """Projects persisted through an owner-scoped store.

    Failed calls leave ``projects`` untouched and record a readable message in
    ``last_error``; ``loading`` is set only while a call is in flight.
    """

    def __init__(
        self,
        store: ProjectStore,
        identity: IdentityProvider,
        today: Callable[[], datetime.date] = datetime.date.today,
    ):
        self.store = store
        self.identity = identity
        self.today = today
        self.projects: List[Project] = []
        self.loading = False
        self.last_error: str | None = None
        self.last_error_kind: type[CostboardError] | None = None

    def _owner(self) -> str:
        owner_id = self.identity.current_user_id()
        if not owner_id:
            raise NotAuthenticatedError()
        return owner_id

    def _run(self, action: Callable[[], None]) -> bool:
        self.loading = True
        self.last_error = None
        self.last_error_kind = None
        try:
            action()
            return True
        except CostboardError as exc:
            logger.warning("Project operation failed: %s", exc)
            self.last_error = str(exc)
            self.last_error_kind = type(exc)
            return False
        finally:
            self.loading = False

    def _stored_projects(self, owner_id: str) -> List[Project]:
        return [Project.from_row(row) for row in self.store.fetch_all(owner_id)]

    def _refresh(self, owner_id: str) -> None:
        self.projects = self._stored_projects(owner_id)

    def fetch(self) -> bool:
        return self._run(lambda: self._refresh(self._owner()))

    def add(self, form: Dict[str, Any], auto_allocate: bool = False) -> bool:
        def action() -> None:
            owner_id = self._owner()
            row = project_form_to_row(form)
            if auto_allocate:
                allocation = self.allocation_for(
                    datetime.date.fromisoformat(row["start_date"]),
                    datetime.date.fromisoformat(row["end_date"]),
                    projects=self._stored_projects(owner_id),
                )
                row["overhead_allocation_percentage"] = allocation.percentage
            row["user_id"] = owner_id
            self.store.insert(row)
            self._refresh(owner_id)

        return self._run(action)

    def update(self, project_id: str, form: Dict[str, Any], auto_allocate: bool = False) -> bool:
        def action() -> None:
            owner_id = self._owner()
            row = project_form_to_row(form, partial=True)
            stored = self._stored_projects(owner_id)
            existing = next((p for p in stored if p.id == project_id), None)
            start = row.get("start_date") or (existing.start_date.isoformat() if existing else None)
            end = row.get("end_date") or (existing.end_date.isoformat() if existing else None)
            if start and end:
                start_date = parse_iso_date(start, "startDate")
                end_date = parse_iso_date(end, "endDate")
                validate_date_range(start_date, end_date)
                if auto_allocate:
                    allocation = self.allocation_for(
                        start_date, end_date, exclude_id=project_id, projects=stored
                    )
                    row["overhead_allocation_percentage"] = allocation.percentage
            self.store.update(project_id, owner_id, row)
            self._refresh(owner_id)

        return self._run(action)

    def delete(self, project_id: str) -> bool:
        def action() -> None:
            owner_id = self._owner()
            self.store.delete(project_id, owner_id)
            self._refresh(owner_id)

        return self._run(action)

    def find(self, project_id: str) -> Project | None:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def metrics(self, project: Project) -> DurationMetrics:
        return duration_metrics(project.start_date, project.end_date, self.today())

    def active_projects(self, projects: List[Project] | None = None) -> List[Project]:
        today = self.today()
        pool = self.projects if projects is None else projects
        return [project for project in pool if project.is_active(today)]

    def allocation_for(
        self,
        start_date: datetime.date,
        end_date: datetime.date,
        exclude_id: str | None = None,
        projects: List[Project] | None = None,
    ) -> AllocationResult:
        """Automatic allocation for a new or edited project.

        ``projects`` is the owner's stored set; it defaults to the last
        fetched list. The edited project itself is left out of the active set
        so its old dates are not counted twice.
        """
        candidate = duration_metrics(start_date, end_date, self.today()).remaining_weeks
        others = [
            (project.id, self.metrics(project).remaining_weeks)
            for project in self.active_projects(projects)
            if project.id != exclude_id
        ]
        return auto_allocation(candidate, others)

    def project_cost(self, project: Project, monthly_overhead: float) -> float:
        weekly = weekly_overhead(monthly_overhead)
        return allocated_overhead(
            weekly,
            self.metrics(project).duration_in_weeks,
            project.overhead_allocation_percentage,
        )

    def project_view(self, project: Project, monthly_overhead: float) -> Dict[str, Any]:
        metrics = self.metrics(project)
        cost = self.project_cost(project, monthly_overhead)
        return {
            "id": project.id,
            "name": project.name,
            "description": project.description,
            "startDate": project.start_date.isoformat(),
            "endDate": project.end_date.isoformat(),
            "status": project.status,
            "overheadAllocationPercentage": project.overhead_allocation_percentage,
            "price": project.price,
            "durationInWeeks": metrics.duration_in_weeks,
            "remainingWeeks": metrics.remaining_weeks,
            "cost": cost,
            "profitMargin": profit_margin(project.price, cost),
        }

    def list_views(self, monthly_overhead: float) -> List[Dict[str, Any]]:
        return [self.project_view(project, monthly_overhead) for project in self.projects]

    def breakdown(self, project: Project, monthly_overhead: float) -> Dict[str, Any]:
        """Cost presentation for one project: overhead vs. profit and weekly cost."""
        weekly = weekly_overhead(monthly_overhead)
        metrics = self.metrics(project)
        overhead = self.project_cost(project, monthly_overhead)
        profit = project.price - overhead
        return {
            "project": self.project_view(project, monthly_overhead),
            "weeklyOverhead": weekly * project.overhead_allocation_percentage / 100,
            "overhead": overhead,
            "profit": profit,
            "overheadShareOfPrice": overhead / project.price * 100 if project.price else 0.0,
            "profitShareOfPrice": profit / project.price * 100 if project.price else 0.0,
            "weekly": weekly_cost_series(
                weekly, metrics.duration_in_weeks, project.overhead_allocation_percentage
            ),
        }

    def quote(
        self,
        start_date: datetime.date,
        end_date: datetime.date,
        monthly_overhead: float,
        profit_margin_percent: float,
        auto_allocate: bool = True,
        manual_percentage: float | None = None,
        projects: List[Project] | None = None,
    ) -> Dict[str, Any]:
        """Pricing calculator: price a prospective project against current overhead.

        Active projects' percentages are returned for display only and are
        never written back.
        """
        metrics = duration_metrics(start_date, end_date, self.today())
        active = self.active_projects(projects)
        if auto_allocate:
            allocation = self.allocation_for(start_date, end_date, projects=projects)
            percentage = allocation.percentage
            shares = allocation.shares
        else:
            percentage = DEFAULT_ALLOCATION_PERCENTAGE if manual_percentage is None else manual_percentage
            shares = {project.id: project.overhead_allocation_percentage for project in active}
        weekly = weekly_overhead(monthly_overhead)
        cost = allocated_overhead(weekly, metrics.duration_in_weeks, percentage)
        price = project_price(cost, profit_margin_percent)
        active_rows = [
            {
                "id": project.id,
                "name": project.name,
                "remainingWeeks": self.metrics(project).remaining_weeks,
                "allocationPercentage": shares.get(project.id, 0.0),
            }
            for project in active
        ]
        active_rows.sort(key=lambda row: row["allocationPercentage"], reverse=True)
        return {
            "durationInWeeks": metrics.duration_in_weeks,
            "remainingWeeks": metrics.remaining_weeks,
            "autoAllocate": auto_allocate,
            "allocationPercentage": percentage,
            "monthlyOverhead": monthly_overhead,
            "weeklyOverhead": weekly,
            "allocatedOverhead": cost,
            "profitMarginPercent": profit_margin_percent,
            "profitAmount": price - cost,
            "price": price,
            "activeProjects": active_rows,
        }
