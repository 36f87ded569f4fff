import pytest

from costboard.config import Settings
from costboard.data_model import (
    APPS_SUBSCRIPTIONS,
    EMPLOYEES_PAYROLL,
    GOVERNMENT_OBLIGATIONS,
    HEALTH_INSURANCE,
    OFFICE_RENT,
    OFFICE_SUPPLIES,
)
from costboard.errors import RecordNotFoundError
from costboard.workspace import Workspace


def _cost(workspace, cost_id):
    return workspace.costs.get(cost_id).monthly_cost


def test_subscriptions_cost_is_recomputed_at_startup(workspace):
    assert _cost(workspace, APPS_SUBSCRIPTIONS) == 40 + 15 + 10


def test_subscriptions_cost_follows_every_mutation(workspace):
    added = workspace.add_record("subscriptions", {"name": "Slack", "monthlyCost": 12.5})
    assert _cost(workspace, APPS_SUBSCRIPTIONS) == pytest.approx(77.5)

    workspace.update_record("subscriptions", added["id"], {"monthlyCost": 20})
    assert _cost(workspace, APPS_SUBSCRIPTIONS) == pytest.approx(85)

    workspace.delete_record("subscriptions", "1")
    assert _cost(workspace, APPS_SUBSCRIPTIONS) == pytest.approx(45)
    expected = sum(row["monthlyCost"] for row in workspace.subscriptions.list())
    assert _cost(workspace, APPS_SUBSCRIPTIONS) == pytest.approx(expected)


def test_other_ledgers_push_totals_only_when_changed(workspace):
    # Untouched ledgers keep the stored category values.
    assert _cost(workspace, EMPLOYEES_PAYROLL) == 2500

    workspace.add_record("employees", {"name": "Ana", "salary": 1000})
    assert _cost(workspace, EMPLOYEES_PAYROLL) == 8000 + 7500 + 6000 + 1000

    workspace.delete_record("obligations", "3")
    assert _cost(workspace, GOVERNMENT_OBLIGATIONS) == 500 + 300

    workspace.update_record("supplies", "1", {"monthlyQuantity": 6})
    assert _cost(workspace, OFFICE_SUPPLIES) == 30 + 20 + 24

    workspace.delete_record("insurance", "3")
    assert _cost(workspace, HEALTH_INSURANCE) == 350 + 300


def test_failed_mutations_do_not_push(workspace):
    workspace.update_record("employees", "missing", {"salary": 1})
    workspace.delete_record("employees", "missing")

    assert _cost(workspace, EMPLOYEES_PAYROLL) == 2500


def test_rent_expense_changes_push_monthly_rent(workspace):
    expense = workspace.add_rent_expense("2", {"name": "Cleaning", "annualAmount": 1200})
    assert _cost(workspace, OFFICE_RENT) == pytest.approx(35400 / 12)

    workspace.delete_rent_expense("2", expense["id"])
    assert _cost(workspace, OFFICE_RENT) == pytest.approx(34200 / 12)

    workspace.delete_record("office-rent", "1")
    assert _cost(workspace, OFFICE_RENT) == pytest.approx(13800 / 12)


def test_unknown_ledger_raises_not_found(workspace):
    with pytest.raises(RecordNotFoundError):
        workspace.ledger("parking")


def test_monthly_overhead_is_cost_ledger_total(workspace):
    assert workspace.monthly_overhead() == pytest.approx(2500 + 1800 + 1200 + 850 + 450 + 65)


def test_from_settings_persists_every_ledger_as_json(tmp_path):
    settings = Settings(data_dir=str(tmp_path), db_path=str(tmp_path / "projects.sqlite"))
    ws = Workspace.from_settings(settings)

    ws.add_record("insurance", {"employeeName": "Ana", "monthlyCost": 120})
    ws.add_rent_expense("1", {"name": "Parking", "annualAmount": 600})

    assert (tmp_path / "insurance-storage.json").exists()
    assert (tmp_path / "office-rent-storage.json").exists()
    assert (tmp_path / "costs-storage.json").exists()

    reloaded = Workspace.from_settings(settings)
    assert len(reloaded.insurance.list()) == 4
    assert _cost(reloaded, HEALTH_INSURANCE) == pytest.approx(970)


def test_unseeded_workspace_starts_empty(tmp_path):
    settings = Settings(data_dir=str(tmp_path), db_path=str(tmp_path / "p.sqlite"), seed=False)
    ws = Workspace.from_settings(settings)

    assert ws.employees.list() == []
    assert ws.monthly_overhead() == 0
