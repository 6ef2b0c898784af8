import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str = "secret123") -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def seed_account(client: TestClient, token: str) -> dict:
    client_id = client.post(
        "/clients/", json={"name": "Acme Corp", "email": "billing@example.com"}, headers=auth(token)
    ).json()["id"]
    invoice = client.post(
        "/invoices/",
        json={
            "client_id": client_id,
            "issue_date": "2024-03-01T00:00:00Z",
            "due_date": "2024-03-31T00:00:00Z",
            "items": [{"description": "Design", "quantity": 2, "unit_price": 50}],
        },
        headers=auth(token),
    ).json()
    client.post(
        "/recurring-invoices/",
        json={
            "client_id": client_id,
            "name": "Monthly retainer",
            "frequency": "MONTHLY",
            "start_at": "2024-01-31T09:00:00Z",
            "line_items": [{"description": "Retainer", "quantity": 1, "unit_price": 500}],
        },
        headers=auth(token),
    )
    client.post("/reminder-policies/", json={"name": "Standard", "reminder_days": [0, 7]}, headers=auth(token))
    client.post(
        "/expenses/",
        json={"date": "2024-03-10T00:00:00Z", "amount": 49.99, "category": "SOFTWARE", "vendor": "GitHub"},
        headers=auth(token),
    )
    client.put("/preferences/me", json={"default_tax_rate": 20}, headers=auth(token))
    return {"client_id": client_id, "invoice": invoice}


def test_download_contains_everything_the_user_owns():
    client = TestClient(app)
    token = register_and_login(client, "export1@example.com")
    seeded = seed_account(client, token)

    resp = client.get("/auth/download-data", headers=auth(token))

    assert resp.status_code == 200
    assert resp.headers["content-disposition"] == 'attachment; filename="my-data.json"'
    data = resp.json()
    assert data["user"]["email"] == "export1@example.com"
    assert data["data_version"] == "1.0"
    assert data["export_date"]
    assert float(data["preferences"]["default_tax_rate"]) == 20.0
    assert [c["id"] for c in data["clients"]] == [seeded["client_id"]]
    assert [inv["invoice_number"] for inv in data["invoices"]] == [seeded["invoice"]["invoice_number"]]
    assert data["invoices"][0]["client"]["name"] == "Acme Corp"
    assert [item["description"] for item in data["invoices"][0]["items"]] == ["Design"]
    assert [tmpl["name"] for tmpl in data["recurring_invoices"]] == ["Monthly retainer"]
    assert [policy["reminder_days"] for policy in data["reminder_policies"]] == [[0, 7]]
    assert [expense["vendor"] for expense in data["expenses"]] == ["GitHub"]


def test_download_is_scoped_to_the_caller():
    client = TestClient(app)
    token_a = register_and_login(client, "export2a@example.com")
    token_b = register_and_login(client, "export2b@example.com")
    seed_account(client, token_a)

    data = client.get("/auth/download-data", headers=auth(token_b)).json()

    assert data["user"]["email"] == "export2b@example.com"
    assert data["preferences"] is None
    for section in ("clients", "invoices", "recurring_invoices", "reminder_policies", "expenses"):
        assert data[section] == []


def test_download_requires_auth():
    client = TestClient(app)
    assert client.get("/auth/download-data").status_code == 401
