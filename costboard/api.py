"""REST backend for the operating-cost dashboard."""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List

from flask import Blueprint, Flask, current_app, has_request_context, jsonify, request

from .config import Settings
from .data_model import (
    EmployeeTableModel,
    InsurancePolicyTableModel,
    ObligationTableModel,
    ProjectTableModel,
    RentExpenseTableModel,
    BranchTableModel,
    SubscriptionTableModel,
    SupplyTableModel,
    parse_iso_date,
    validate_date_range,
)
from .data_model.base import to_float
from .engine.aggregate import (
    dashboard_summary,
    insurance_summary,
    obligations_summary,
    payroll_summary,
    rent_summary,
    subscriptions_summary,
    supplies_summary,
)
from .errors import CostboardError, PersistenceError
from .persistence import CallableIdentity
from .workspace import Workspace

logger = logging.getLogger(__name__)

api = Blueprint("costboard", __name__, url_prefix="/api")

USER_HEADER = "X-User-Id"
TRUTHY = {"1", "true", "yes", "on"}

SCHEMA_MODELS = {
    "subscriptions": SubscriptionTableModel(),
    "employees": EmployeeTableModel(),
    "obligations": ObligationTableModel(),
    "supplies": SupplyTableModel(),
    "insurance": InsurancePolicyTableModel(),
    "office-rent": BranchTableModel(),
    "rent-expenses": RentExpenseTableModel(),
    "projects": ProjectTableModel(),
}

SUMMARIES = {
    "subscriptions": subscriptions_summary,
    "employees": payroll_summary,
    "obligations": obligations_summary,
    "supplies": supplies_summary,
    "insurance": insurance_summary,
}


def _workspace() -> Workspace:
    return current_app.extensions["costboard"]


def _is_nan(value: Any) -> bool:
    try:
        return not math.isfinite(value)
    except (TypeError, ValueError):
        return False


def _sanitize_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    clean_rows: List[Dict[str, Any]] = []
    for row in records:
        clean_rows.append({key: (None if _is_nan(value) else value) for key, value in row.items()})
    return clean_rows


def _extract_payload_value(payload: dict, *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def _as_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUTHY


def _json_body() -> dict:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _costs_payload() -> Dict[str, Any]:
    ws = _workspace()
    return {
        "costs": [cost.to_payload() for cost in ws.costs.list_costs()],
        "totalMonthly": ws.costs.total_monthly(),
    }


def _project_error():
    ledger = _workspace().projects
    status = ledger.last_error_kind.status_code if ledger.last_error_kind else PersistenceError.status_code
    return jsonify({"error": ledger.last_error or "An error occurred"}), status


def _projects_payload() -> Dict[str, Any]:
    ws = _workspace()
    overhead = ws.monthly_overhead()
    return {
        "projects": ws.projects.list_views(overhead),
        "monthlyOverhead": overhead,
    }


@api.errorhandler(CostboardError)
def handle_costboard_error(exc: CostboardError):
    return jsonify({"error": str(exc)}), exc.status_code


@api.after_app_request
def apply_cors_headers(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,DELETE,OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = f"Content-Type,{USER_HEADER}"
    return response


@api.get("/health")
def healthcheck():
    return jsonify({"status": "ok"})


@api.get("/schema")
def get_schema():
    return jsonify({name: model.payload() for name, model in SCHEMA_MODELS.items()})


@api.get("/costs")
def list_costs():
    return jsonify(_costs_payload())


@api.get("/costs/summary")
def costs_summary():
    period = request.args.get("period", "monthly")
    try:
        summary = dashboard_summary(_workspace().costs.list_costs(), period)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    summary["costs"] = _sanitize_records(summary["costs"])
    return jsonify(summary)


@api.put("/costs/<cost_id>")
def update_cost(cost_id: str):
    ws = _workspace()
    cost = ws.costs.get(cost_id)
    if cost is None:
        return jsonify({"error": "Cost category not found."}), 404
    payload = _json_body()
    value = _extract_payload_value(payload, "monthlyCost", "monthly_cost", default=0.0)
    updated = ws.costs.update_cost(cost_id, value)
    body = _costs_payload()
    body["updated"] = updated
    return jsonify(body)


@api.get("/projects")
def list_projects():
    ws = _workspace()
    if not ws.projects.fetch():
        return _project_error()
    return jsonify(_projects_payload())


@api.post("/projects")
def add_project():
    payload = _json_body()
    auto_allocate = _as_bool(payload.get("autoAllocate"))
    if not _workspace().projects.add(payload, auto_allocate=auto_allocate):
        return _project_error()
    return jsonify(_projects_payload()), 201


@api.put("/projects/<project_id>")
def update_project(project_id: str):
    payload = _json_body()
    auto_allocate = _as_bool(payload.get("autoAllocate"))
    if not _workspace().projects.update(project_id, payload, auto_allocate=auto_allocate):
        return _project_error()
    return jsonify(_projects_payload())


@api.delete("/projects/<project_id>")
def delete_project(project_id: str):
    if not _workspace().projects.delete(project_id):
        return _project_error()
    return jsonify(_projects_payload())


@api.get("/projects/<project_id>/breakdown")
def project_breakdown(project_id: str):
    ws = _workspace()
    if not ws.projects.fetch():
        return _project_error()
    project = ws.projects.find(project_id)
    if project is None:
        return jsonify({"error": "Project not found."}), 404
    return jsonify(ws.projects.breakdown(project, ws.monthly_overhead()))


@api.post("/pricing/quote")
def pricing_quote():
    ws = _workspace()
    payload = _json_body()
    start = parse_iso_date(_extract_payload_value(payload, "startDate", "start_date"), "startDate")
    end = parse_iso_date(_extract_payload_value(payload, "endDate", "end_date"), "endDate")
    validate_date_range(start, end)
    manual = _extract_payload_value(payload, "allocationPercentage", "manualAllocationPercentage")
    warning = None
    active = None
    if not ws.projects.fetch():
        # The owner's projects are unknown, so nothing shares the overhead.
        warning = ws.projects.last_error
        active = []
    quote = ws.projects.quote(
        start,
        end,
        ws.monthly_overhead(),
        to_float(_extract_payload_value(payload, "profitMargin", "profitMarginPercent", default=20.0)),
        auto_allocate=_as_bool(payload.get("autoAllocate"), default=True),
        manual_percentage=None if manual is None else to_float(manual),
        projects=active,
    )
    quote["name"] = str(payload.get("name", ""))
    quote["description"] = str(payload.get("description", ""))
    if warning:
        quote["warning"] = warning
    return jsonify(quote)


@api.get("/office-rent/summary")
def office_rent_summary():
    period = request.args.get("period", "monthly")
    return jsonify(rent_summary(_workspace().office_rent.list(), period))


@api.post("/office-rent/<branch_id>/expenses")
def add_rent_expense(branch_id: str):
    row = _workspace().add_rent_expense(branch_id, _json_body())
    if row is None:
        return jsonify({"error": "Branch not found."}), 404
    return jsonify({"expense": row, "costs": _costs_payload()}), 201


@api.put("/office-rent/<branch_id>/expenses/<expense_id>")
def update_rent_expense(branch_id: str, expense_id: str):
    row = _workspace().update_rent_expense(branch_id, expense_id, _json_body())
    if row is None:
        return jsonify({"error": "Expense not found."}), 404
    return jsonify({"expense": row, "costs": _costs_payload()})


@api.delete("/office-rent/<branch_id>/expenses/<expense_id>")
def delete_rent_expense(branch_id: str, expense_id: str):
    if not _workspace().delete_rent_expense(branch_id, expense_id):
        return jsonify({"error": "Expense not found."}), 404
    return jsonify({"message": "Expense deleted.", "costs": _costs_payload()})


@api.get("/<kind>")
def list_records(kind: str):
    ledger = _workspace().ledger(kind)
    return jsonify({"records": ledger.list(), "totalMonthly": ledger.monthly_total()})


@api.get("/<kind>/summary")
def record_summary(kind: str):
    ledger = _workspace().ledger(kind)
    summarize = SUMMARIES.get(kind)
    if summarize is None:
        return jsonify({"error": "No summary for this ledger."}), 404
    summary = summarize(ledger.list())
    for key in ("lowStock", "overBudget"):
        if key in summary:
            summary[key] = _sanitize_records(summary[key])
    return jsonify(summary)


@api.post("/<kind>")
def add_record(kind: str):
    row = _workspace().add_record(kind, _json_body())
    return jsonify({"record": row, "costs": _costs_payload()}), 201


@api.get("/<kind>/<record_id>")
def get_record(kind: str, record_id: str):
    row = _workspace().ledger(kind).get(record_id)
    if row is None:
        return jsonify({"error": "Record not found."}), 404
    return jsonify({"record": row})


@api.put("/<kind>/<record_id>")
def update_record(kind: str, record_id: str):
    row = _workspace().update_record(kind, record_id, _json_body())
    if row is None:
        return jsonify({"error": "Record not found."}), 404
    return jsonify({"record": row, "costs": _costs_payload()})


@api.delete("/<kind>/<record_id>")
def delete_record(kind: str, record_id: str):
    if not _workspace().delete_record(kind, record_id):
        return jsonify({"error": "Record not found."}), 404
    return jsonify({"message": "Record deleted.", "costs": _costs_payload()})


def request_user(default_user: str | None = None) -> str | None:
    if has_request_context():
        header = request.headers.get(USER_HEADER, "").strip()
        if header:
            return header
    return default_user


def create_app(workspace: Workspace | None = None, settings: Settings | None = None) -> Flask:
    settings = settings or Settings.from_env()
    if workspace is None:
        identity = CallableIdentity(lambda: request_user(settings.default_user))
        workspace = Workspace.from_settings(settings, identity=identity)
    app = Flask(__name__)
    app.extensions["costboard"] = workspace
    app.register_blueprint(api)
    logger.info("costboard API ready (data dir %s)", settings.data_dir)
    return app
