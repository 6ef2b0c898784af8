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


def create_expense(client: TestClient, token: str, **overrides) -> dict:
    body = {
        "date": "2024-03-10T00:00:00Z",
        "amount": 49.99,
        "category": "SOFTWARE",
        "vendor": "GitHub",
        "description": "Team plan",
    }
    body.update(overrides)
    resp = client.post("/expenses/", json=body, headers=auth(token))
    assert resp.status_code == 201, resp.text
    return resp.json()


def seed(client: TestClient, token: str) -> None:
    create_expense(client, token)
    create_expense(client, token, date="2024-03-12T00:00:00Z", amount=250, category="TRAVEL", vendor="Lufthansa")
    create_expense(client, token, date="2024-04-02T00:00:00Z", amount=18.5, category="MEALS", vendor="Cafe Nero")
    create_expense(client, token, date="2024-04-20T00:00:00Z", amount=10.01, category="SOFTWARE", vendor="Github Gist")


def test_create_expense_defaults():
    client = TestClient(app)
    token = register_and_login(client, "exp1@example.com")
    created = create_expense(client, token, category="OTHER")
    assert created["currency"] == "USD"
    assert created["category"] == "OTHER"
    assert float(created["amount"]) == 49.99


def test_expense_validation():
    client = TestClient(app)
    token = register_and_login(client, "exp2@example.com")
    base = {"date": "2024-03-10T00:00:00Z", "amount": 10}
    assert client.post("/expenses/", json={**base, "amount": 0}, headers=auth(token)).status_code == 422
    assert client.post("/expenses/", json={**base, "category": "FUN"}, headers=auth(token)).status_code == 422
    assert client.post("/expenses/", json={**base, "currency": "EURO"}, headers=auth(token)).status_code == 422


def test_list_includes_summary_by_category():
    client = TestClient(app)
    token = register_and_login(client, "exp3@example.com")
    seed(client, token)

    data = client.get("/expenses/", headers=auth(token)).json()
    assert len(data["expenses"]) == 4
    summary = data["summary"]
    assert summary["total_count"] == 4
    assert float(summary["total_amount"]) == 328.5
    assert summary["category_stats"]["SOFTWARE"]["count"] == 2
    assert float(summary["category_stats"]["SOFTWARE"]["total"]) == 60.0
    assert float(summary["category_stats"]["TRAVEL"]["total"]) == 250.0


def test_list_filters():
    client = TestClient(app)
    token = register_and_login(client, "exp4@example.com")
    seed(client, token)

    def vendors(**params):
        resp = client.get("/expenses/", params=params, headers=auth(token))
        assert resp.status_code == 200
        return sorted(expense["vendor"] for expense in resp.json()["expenses"])

    assert vendors(category="SOFTWARE") == ["GitHub", "Github Gist"]
    assert vendors(vendor="github") == ["GitHub", "Github Gist"]
    assert vendors(start_date="2024-04-01T00:00:00Z") == ["Cafe Nero", "Github Gist"]
    assert vendors(end_date="2024-03-31T00:00:00Z") == ["GitHub", "Lufthansa"]
    assert vendors(min_amount=20, max_amount=100) == ["GitHub"]

    filtered = client.get("/expenses/", params={"category": "TRAVEL"}, headers=auth(token)).json()
    assert filtered["summary"]["total_count"] == 1


def test_invalid_filters_return_400():
    client = TestClient(app)
    token = register_and_login(client, "exp5@example.com")

    bad_category = client.get("/expenses/", params={"category": "FUN"}, headers=auth(token))
    assert bad_category.status_code == 400

    bad_range = client.get("/expenses/", params={"min_amount": 50, "max_amount": 10}, headers=auth(token))
    assert bad_range.status_code == 400

    bad_dates = client.get(
        "/expenses/",
        params={"start_date": "2024-05-01T00:00:00Z", "end_date": "2024-04-01T00:00:00Z"},
        headers=auth(token),
    )
    assert bad_dates.status_code == 400


def test_update_and_delete_expense():
    client = TestClient(app)
    token = register_and_login(client, "exp6@example.com")
    created = create_expense(client, token)

    resp = client.put(
        f"/expenses/{created['id']}",
        json={"date": "2024-03-11T00:00:00Z", "amount": 59.99, "category": "SOFTWARE", "vendor": "GitHub"},
        headers=auth(token),
    )
    assert resp.status_code == 200
    assert float(resp.json()["amount"]) == 59.99
    assert resp.json()["description"] is None

    assert client.delete(f"/expenses/{created['id']}", headers=auth(token)).status_code == 200
    assert client.get(f"/expenses/{created['id']}", headers=auth(token)).status_code == 404


def test_expenses_are_tenant_isolated():
    client = TestClient(app)
    token_a = register_and_login(client, "exp7a@example.com")
    token_b = register_and_login(client, "exp7b@example.com")
    created = create_expense(client, token_a)

    listed = client.get("/expenses/", headers=auth(token_b)).json()
    assert listed["expenses"] == []
    assert listed["summary"]["total_count"] == 0
    assert client.get(f"/expenses/{created['id']}", headers=auth(token_b)).status_code == 404
    assert client.delete(f"/expenses/{created['id']}", headers=auth(token_b)).status_code == 404


def test_vendor_filter_treats_wildcards_literally():
    client = TestClient(app)
    token = register_and_login(client, "exp8@example.com")
    create_expense(client, token, vendor="100% Organic")
    create_expense(client, token, vendor="1000 Organics")
    create_expense(client, token, vendor="a_b Supplies")
    create_expense(client, token, vendor="axb Supplies")

    def vendors(term):
        resp = client.get("/expenses/", params={"vendor": term}, headers=auth(token))
        assert resp.status_code == 200
        return [expense["vendor"] for expense in resp.json()["expenses"]]

    assert vendors("0%") == ["100% Organic"]
    assert vendors("a_b") == ["a_b Supplies"]
