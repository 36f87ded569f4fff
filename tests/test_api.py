import datetime

import pytest

from costboard.api import create_app, request_user
from costboard.config import Settings
from costboard.engine.storage import JsonKeyValueStore
from costboard.persistence import CallableIdentity, SqliteProjectStore
from costboard.workspace import Workspace

TODAY = datetime.date(2025, 1, 1)
USER = {"X-User-Id": "user-1"}


def _client(tmp_path):
    settings = Settings(data_dir=str(tmp_path), db_path=str(tmp_path / "projects.sqlite"))
    workspace = Workspace(
        store=JsonKeyValueStore(settings.data_dir),
        project_store=SqliteProjectStore(settings.db_path),
        identity=CallableIdentity(lambda: request_user(None)),
        today=lambda: TODAY,
    )
    app = create_app(workspace=workspace, settings=settings)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def client(tmp_path):
    return _client(tmp_path)


def test_health_and_schema(client):
    assert client.get("/api/health").get_json() == {"status": "ok"}

    schema = client.get("/api/schema").get_json()
    assert "employees" in schema
    assert "projects" in schema


def test_costs_list_and_summary(client):
    body = client.get("/api/costs").get_json()
    assert len(body["costs"]) == 6
    assert body["totalMonthly"] == pytest.approx(6865)

    summary = client.get("/api/costs/summary?period=annually").get_json()
    assert summary["costs"][0]["id"] == "employeesPayroll"
    assert summary["costs"][0]["currentValue"] == pytest.approx(30000)

    assert client.get("/api/costs/summary?period=daily").status_code == 400


def test_update_cost_coerces_and_ignores_derived(client):
    body = client.put("/api/costs/officeRent", json={"monthlyCost": "oops"}).get_json()
    rent = next(cost for cost in body["costs"] if cost["id"] == "officeRent")
    assert body["updated"] is True
    assert rent["monthlyCost"] == 0

    derived = client.put("/api/costs/appsSubscriptions", json={"monthlyCost": 1})
    assert derived.status_code == 200
    assert derived.get_json()["updated"] is False

    assert client.put("/api/costs/catering", json={"monthlyCost": 1}).status_code == 404


def test_record_crud_pushes_cost_totals(client):
    created = client.post("/api/subscriptions", json={"name": "Slack", "monthlyCost": 12.5})
    assert created.status_code == 201
    record_id = created.get_json()["record"]["id"]
    apps = next(c for c in created.get_json()["costs"]["costs"] if c["id"] == "appsSubscriptions")
    assert apps["monthlyCost"] == pytest.approx(77.5)

    assert client.get(f"/api/subscriptions/{record_id}").get_json()["record"]["name"] == "Slack"
    assert client.put(f"/api/subscriptions/{record_id}", json={"monthlyCost": 5}).status_code == 200
    assert client.delete(f"/api/subscriptions/{record_id}").status_code == 200
    assert client.delete(f"/api/subscriptions/{record_id}").status_code == 404

    listing = client.get("/api/subscriptions").get_json()
    assert listing["totalMonthly"] == pytest.approx(65)


def test_unknown_ledger_is_not_found(client):
    assert client.get("/api/parking").status_code == 404
    assert client.post("/api/parking", json={}).status_code == 404


def test_ledger_summaries(client):
    supplies = client.get("/api/supplies/summary").get_json()
    assert supplies["budgetVariance"] == pytest.approx(-16)

    rent = client.get("/api/office-rent/summary?period=quarterly").get_json()
    assert rent["periodCost"] == pytest.approx(8550)


def test_rent_expenses_update_office_rent_cost(client):
    response = client.post("/api/office-rent/2/expenses", json={"name": "Cleaning", "annualAmount": 1200})
    assert response.status_code == 201
    rent = next(c for c in response.get_json()["costs"]["costs"] if c["id"] == "officeRent")
    assert rent["monthlyCost"] == pytest.approx(2950)

    assert client.post("/api/office-rent/9/expenses", json={}).status_code == 404


def test_projects_require_a_user(client):
    response = client.post(
        "/api/projects",
        json={"name": "Alpha", "startDate": "2025-01-01", "endDate": "2025-01-29"},
    )

    assert response.status_code == 401
    assert response.get_json()["error"] == "Not authenticated"


def test_project_lifecycle(client):
    created = client.post(
        "/api/projects",
        json={"name": "Alpha", "startDate": "2025-01-01", "endDate": "2025-01-29", "autoAllocate": True},
        headers=USER,
    )
    assert created.status_code == 201
    project = created.get_json()["projects"][0]
    assert project["overheadAllocationPercentage"] == pytest.approx(100)
    assert project["durationInWeeks"] == 4

    updated = client.put(f"/api/projects/{project['id']}", json={"price": 9000}, headers=USER)
    assert updated.get_json()["projects"][0]["price"] == 9000

    breakdown = client.get(f"/api/projects/{project['id']}/breakdown", headers=USER).get_json()
    assert len(breakdown["weekly"]) == 4

    assert client.get("/api/projects/missing/breakdown", headers=USER).status_code == 404

    deleted = client.delete(f"/api/projects/{project['id']}", headers=USER)
    assert deleted.get_json()["projects"] == []


def test_invalid_project_dates_are_rejected(client):
    response = client.post(
        "/api/projects",
        json={"name": "Alpha", "startDate": "2025-02-01", "endDate": "2025-01-01"},
        headers=USER,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "End date must be after start date."


def test_pricing_quote(client):
    response = client.post(
        "/api/pricing/quote",
        json={"startDate": "2025-01-01", "endDate": "2025-01-15", "profitMargin": 25},
        headers=USER,
    )

    quote = response.get_json()
    assert response.status_code == 200
    assert quote["allocationPercentage"] == pytest.approx(100)
    assert quote["weeklyOverhead"] == pytest.approx(6865 * 12 / 52)
    assert quote["price"] == pytest.approx(quote["allocatedOverhead"] * 1.25)
    assert "warning" not in quote


def test_pricing_quote_without_user_still_prices(client):
    quote = client.post(
        "/api/pricing/quote",
        json={"startDate": "2025-01-01", "endDate": "2025-01-15", "autoAllocate": False},
    ).get_json()

    assert quote["allocationPercentage"] == 20
    assert quote["warning"] == "Not authenticated"


def test_pricing_quote_validates_dates(client):
    response = client.post("/api/pricing/quote", json={"startDate": "2025-01-15", "endDate": "2025-01-01"})
    assert response.status_code == 400

    response = client.post("/api/pricing/quote", json={"startDate": "soon", "endDate": "2025-01-01"})
    assert response.status_code == 400


def _post_project(client, name, end, user="user-1"):
    return client.post(
        "/api/projects",
        json={"name": name, "startDate": "2025-01-01", "endDate": end, "autoAllocate": True},
        headers={"X-User-Id": user},
    )


def _allocation(response, name):
    project = next(p for p in response.get_json()["projects"] if p["name"] == name)
    return project["overheadAllocationPercentage"]


def test_auto_allocation_survives_a_restart(tmp_path):
    first = _client(tmp_path)
    assert _allocation(_post_project(first, "Alpha", "2025-01-29"), "Alpha") == pytest.approx(100)

    restarted = _client(tmp_path)
    response = _post_project(restarted, "Beta", "2025-02-12")

    assert response.status_code == 201
    assert _allocation(response, "Beta") == pytest.approx(60)
    assert _allocation(response, "Alpha") == pytest.approx(100)


def test_auto_allocation_is_per_user(client):
    _post_project(client, "Alpha", "2025-01-29", user="user-1")

    response = _post_project(client, "Gamma", "2025-02-12", user="user-2")

    assert [p["name"] for p in response.get_json()["projects"]] == ["Gamma"]
    assert _allocation(response, "Gamma") == pytest.approx(100)

    own = client.get("/api/projects", headers=USER).get_json()["projects"]
    assert [p["name"] for p in own] == ["Alpha"]


def test_anonymous_quote_ignores_other_users_projects(client):
    _post_project(client, "Alpha", "2025-01-29", user="user-1")

    quote = client.post(
        "/api/pricing/quote",
        json={"startDate": "2025-01-01", "endDate": "2025-01-15"},
    ).get_json()

    assert quote["warning"] == "Not authenticated"
    assert quote["allocationPercentage"] == pytest.approx(100)
    assert quote["activeProjects"] == []
