from costboard.data_model import (
    APPS_SUBSCRIPTIONS,
    EmployeeTableModel,
    OFFICE_RENT,
    SupplyTableModel,
    payroll_monthly_total,
    rent_monthly_total,
    supplies_monthly_total,
)
from costboard.engine.ledgers import CostLedger, OfficeRentLedger, RecordLedger
from costboard.engine.storage import JsonKeyValueStore, MemoryKeyValueStore


def test_cost_ledger_lists_the_six_fixed_categories():
    ledger = CostLedger(MemoryKeyValueStore())

    ids = [cost.id for cost in ledger.list_costs()]

    assert ids == [
        "employeesPayroll",
        "officeRent",
        "governmentObligations",
        "healthInsurance",
        "officeSupplies",
        "appsSubscriptions",
    ]


def test_update_cost_replaces_stored_value():
    ledger = CostLedger(MemoryKeyValueStore())

    assert ledger.update_cost(OFFICE_RENT, 2100) is True

    rent = [cost for cost in ledger.list_costs() if cost.id == OFFICE_RENT][0]
    assert rent.monthly_cost == 2100


def test_update_cost_ignores_unknown_and_derived_ids():
    ledger = CostLedger(MemoryKeyValueStore())
    ledger.set_derived(APPS_SUBSCRIPTIONS, 65)
    before = ledger.total_monthly()

    assert ledger.update_cost("catering", 999) is False
    assert ledger.update_cost(APPS_SUBSCRIPTIONS, 999) is False

    assert ledger.total_monthly() == before
    assert ledger.get(APPS_SUBSCRIPTIONS).monthly_cost == 65


def test_update_cost_coerces_invalid_input_to_zero():
    ledger = CostLedger(MemoryKeyValueStore())

    ledger.update_cost(OFFICE_RENT, "not a number")

    assert ledger.get(OFFICE_RENT).monthly_cost == 0


def test_total_monthly_includes_derived_category():
    ledger = CostLedger(MemoryKeyValueStore())
    ledger.set_derived(APPS_SUBSCRIPTIONS, 100)

    assert ledger.total_monthly() == 2500 + 1800 + 1200 + 850 + 450 + 100


def test_cost_ledger_reloads_stored_values_but_not_derived(tmp_path):
    store = JsonKeyValueStore(str(tmp_path))
    ledger = CostLedger(store)
    ledger.set_derived(APPS_SUBSCRIPTIONS, 500)
    ledger.update_cost(OFFICE_RENT, 1950)

    reloaded = CostLedger(store)

    assert reloaded.get(OFFICE_RENT).monthly_cost == 1950
    assert reloaded.get(APPS_SUBSCRIPTIONS).monthly_cost == 0


def test_record_ledger_add_generates_unique_ids():
    ledger = RecordLedger(EmployeeTableModel(), MemoryKeyValueStore(), payroll_monthly_total, seed=False)

    first = ledger.add({"name": "Ana", "salary": 4000})
    second = ledger.add({"name": "Ben", "salary": 3000})

    assert first["id"] != second["id"]
    assert [row["name"] for row in ledger.list()] == ["Ana", "Ben"]
    assert ledger.monthly_total() == 7000


def test_record_ledger_add_fills_defaults_and_coerces_values():
    ledger = RecordLedger(EmployeeTableModel(), MemoryKeyValueStore(), payroll_monthly_total, seed=False)

    row = ledger.add({"name": "Ana", "salary": "abc", "status": "retired", "unknown": 1})

    assert row["salary"] == 0
    assert row["status"] == "active"
    assert row["position"] == ""
    assert "unknown" not in row


def test_record_ledger_update_merges_partial_fields():
    ledger = RecordLedger(EmployeeTableModel(), MemoryKeyValueStore(), payroll_monthly_total, seed=False)
    row = ledger.add({"name": "Ana", "salary": 4000, "department": "Ops"})

    updated = ledger.update(row["id"], {"salary": 4500, "id": "hijack"})

    assert updated["id"] == row["id"]
    assert updated["salary"] == 4500
    assert updated["department"] == "Ops"


def test_record_ledger_update_and_delete_unknown_id_are_noops():
    ledger = RecordLedger(EmployeeTableModel(), MemoryKeyValueStore(), payroll_monthly_total)
    before = ledger.list()

    assert ledger.update("missing", {"salary": 1}) is None
    assert ledger.delete("missing") is False
    assert ledger.list() == before


def test_deleted_record_leaves_list_and_total():
    ledger = RecordLedger(SupplyTableModel(), MemoryKeyValueStore(), supplies_monthly_total)
    assert ledger.monthly_total() == 25 + 20 + 24

    assert ledger.delete("2") is True

    assert [row["id"] for row in ledger.list()] == ["1", "3"]
    assert ledger.monthly_total() == 25 + 24


def test_record_ledger_writes_back_on_every_mutation(tmp_path):
    store = JsonKeyValueStore(str(tmp_path))
    ledger = RecordLedger(EmployeeTableModel(), store, payroll_monthly_total)
    added = ledger.add({"name": "Ana", "salary": 4000})
    ledger.delete("1")

    reloaded = RecordLedger(EmployeeTableModel(), store, payroll_monthly_total)

    ids = [row["id"] for row in reloaded.list()]
    assert "1" not in ids
    assert added["id"] in ids


def test_list_returns_copies():
    ledger = RecordLedger(EmployeeTableModel(), MemoryKeyValueStore(), payroll_monthly_total)

    ledger.list()[0]["salary"] = 1

    assert ledger.get("1")["salary"] == 8000


def test_office_rent_ledger_manages_branch_expenses():
    ledger = OfficeRentLedger(MemoryKeyValueStore(), rent_monthly_total)
    assert ledger.monthly_total() == (18000 + 2400 + 12000 + 1800) / 12

    expense = ledger.add_expense("1", {"name": "Security", "annualAmount": 1200, "category": "security"})
    assert ledger.monthly_total() == (18000 + 2400 + 12000 + 1800 + 1200) / 12

    ledger.update_expense("1", expense["id"], {"annualAmount": 2400})
    assert ledger.get("1")["expenses"][-1]["annualAmount"] == 2400

    assert ledger.delete_expense("1", expense["id"]) is True
    assert ledger.delete_expense("1", expense["id"]) is False
    assert ledger.add_expense("missing", {"name": "x"}) is None


def test_office_rent_branch_update_keeps_expenses():
    ledger = OfficeRentLedger(MemoryKeyValueStore(), rent_monthly_total)

    updated = ledger.update("2", {"location": "Uptown", "expenses": []})

    assert updated["location"] == "Uptown"
    assert len(updated["expenses"]) == 2


def test_office_rent_new_branch_gets_expense_ids():
    ledger = OfficeRentLedger(MemoryKeyValueStore(), rent_monthly_total, seed=False)

    branch = ledger.add({"name": "Harbor", "expenses": [{"name": "Rent", "annualAmount": 6000}]})

    assert branch["expenses"][0]["id"]
    assert ledger.monthly_total() == 500


def test_office_rent_ledger_seeds_both_branches():
    ledger = OfficeRentLedger(MemoryKeyValueStore(), rent_monthly_total)

    branches = ledger.list()

    assert [branch["name"] for branch in branches] == ["Main Office", "Branch Office"]
    assert [len(branch["expenses"]) for branch in branches] == [2, 2]
    assert ledger.monthly_total() == 34200 / 12
