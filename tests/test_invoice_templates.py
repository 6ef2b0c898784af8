from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.invoice import Invoice
from backend.app.models.line_item_template import LineItemTemplate
from backend.app.services.recurring import run_recurring_invoices


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


def create_client(client: TestClient, token: str) -> int:
    resp = client.post("/clients/", json={"name": "Acme Corp", "email": "billing@example.com"}, headers=auth(token))
    assert resp.status_code == 201
    return resp.json()["id"]


def template_body(client_id: int, **overrides) -> dict:
    body = {
        "client_id": client_id,
        "name": "Monthly retainer",
        "frequency": "MONTHLY",
        "interval": 1,
        "start_at": "2024-01-31T09:00:00Z",
        "tax_rate": 10,
        "discount": 5,
        "line_items": [
            {"description": "Design", "quantity": 2, "unit_price": 50},
            {"description": "Hosting", "quantity": 1, "unit_price": 20},
        ],
    }
    body.update(overrides)
    return body


def test_create_template_computes_next_due():
    client = TestClient(app)
    token = register_and_login(client, "tmpl1@example.com")
    client_id = create_client(client, token)

    resp = client.post("/recurring-invoices/", json=template_body(client_id), headers=auth(token))
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Monthly retainer"
    assert data["is_active"] is True
    assert data["next_due_at"].startswith("2024-02-29T09:00:00")
    assert [item["description"] for item in data["line_items"]] == ["Design", "Hosting"]
    assert [float(item["total"]) for item in data["line_items"]] == [100.0, 20.0]


def test_weekly_template_next_due():
    client = TestClient(app)
    token = register_and_login(client, "tmpl2@example.com")
    client_id = create_client(client, token)

    resp = client.post(
        "/recurring-invoices/",
        json=template_body(client_id, frequency="WEEKLY", interval=2, start_at="2024-01-01T00:00:00Z"),
        headers=auth(token),
    )
    assert resp.status_code == 201
    assert resp.json()["next_due_at"].startswith("2024-01-15T00:00:00")


def test_template_validation():
    client = TestClient(app)
    token = register_and_login(client, "tmpl3@example.com")
    client_id = create_client(client, token)

    for overrides in ({"frequency": "DAILY"}, {"interval": 0}, {"line_items": []}, {"tax_rate": -1}):
        resp = client.post("/recurring-invoices/", json=template_body(client_id, **overrides), headers=auth(token))
        assert resp.status_code == 422, overrides

    unknown_client = client.post("/recurring-invoices/", json=template_body(999), headers=auth(token))
    assert unknown_client.status_code == 400


def test_templates_are_tenant_isolated():
    client = TestClient(app)
    token_a = register_and_login(client, "tmpl4a@example.com")
    token_b = register_and_login(client, "tmpl4b@example.com")
    client_a = create_client(client, token_a)
    created = client.post("/recurring-invoices/", json=template_body(client_a), headers=auth(token_a)).json()

    assert client.get("/recurring-invoices/", headers=auth(token_b)).json() == []
    assert client.get(f"/recurring-invoices/{created['id']}", headers=auth(token_b)).status_code == 404
    assert (
        client.put(
            f"/recurring-invoices/{created['id']}",
            json=template_body(create_client(client, token_b)),
            headers=auth(token_b),
        ).status_code
        == 404
    )
    assert client.delete(f"/recurring-invoices/{created['id']}", headers=auth(token_b)).status_code == 404

    listed = client.get("/recurring-invoices/", headers=auth(token_a)).json()
    assert [tmpl["id"] for tmpl in listed] == [created["id"]]


def test_update_replaces_line_items_and_schedule():
    client = TestClient(app)
    token = register_and_login(client, "tmpl5@example.com")
    client_id = create_client(client, token)
    created = client.post("/recurring-invoices/", json=template_body(client_id), headers=auth(token)).json()

    resp = client.put(
        f"/recurring-invoices/{created['id']}",
        json=template_body(
            client_id,
            name="Weekly support",
            frequency="WEEKLY",
            start_at="2024-03-04T09:00:00Z",
            is_active=False,
            line_items=[{"description": "Support", "quantity": 1, "unit_price": 80}],
        ),
        headers=auth(token),
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Weekly support"
    assert data["is_active"] is False
    assert data["next_due_at"].startswith("2024-03-11T09:00:00")
    assert [item["description"] for item in data["line_items"]] == ["Support"]

    with SessionLocal() as db:
        assert db.query(LineItemTemplate).filter(LineItemTemplate.template_id == created["id"]).count() == 1


def test_delete_template_removes_line_items():
    client = TestClient(app)
    token = register_and_login(client, "tmpl6@example.com")
    client_id = create_client(client, token)
    created = client.post("/recurring-invoices/", json=template_body(client_id), headers=auth(token)).json()

    resp = client.delete(f"/recurring-invoices/{created['id']}", headers=auth(token))
    assert resp.status_code == 200
    assert client.get(f"/recurring-invoices/{created['id']}", headers=auth(token)).status_code == 404

    with SessionLocal() as db:
        assert db.query(LineItemTemplate).filter(LineItemTemplate.template_id == created["id"]).count() == 0


def test_editing_fired_template_keeps_next_due_date():
    client = TestClient(app)
    token = register_and_login(client, "tmpl7@example.com")
    client_id = create_client(client, token)
    created = client.post(
        "/recurring-invoices/",
        json=template_body(client_id, frequency="WEEKLY", start_at="2024-01-01T00:00:00Z"),
        headers=auth(token),
    ).json()

    run_at = datetime(2024, 1, 20, tzinfo=timezone.utc)
    with SessionLocal() as db:
        for _ in range(3):
            run_recurring_invoices(db, now=run_at)
        assert db.query(Invoice).count() == 2

    renamed = client.put(
        f"/recurring-invoices/{created['id']}",
        json=template_body(client_id, name="Renamed", frequency="WEEKLY", start_at="2024-01-01T00:00:00Z"),
        headers=auth(token),
    )
    assert renamed.status_code == 200
    assert renamed.json()["next_due_at"].startswith("2024-01-22T00:00:00")

    with SessionLocal() as db:
        run_recurring_invoices(db, now=run_at)
        assert db.query(Invoice).count() == 2


def test_schedule_change_on_fired_template_never_moves_backwards():
    client = TestClient(app)
    token = register_and_login(client, "tmpl8@example.com")
    client_id = create_client(client, token)
    created = client.post(
        "/recurring-invoices/",
        json=template_body(client_id, frequency="WEEKLY", start_at="2024-01-01T00:00:00Z"),
        headers=auth(token),
    ).json()

    with SessionLocal() as db:
        run_recurring_invoices(db, now=datetime(2024, 1, 20, tzinfo=timezone.utc))
        run_recurring_invoices(db, now=datetime(2024, 1, 20, tzinfo=timezone.utc))

    # One two-week period from the original start lands before the current next due date.
    slower = client.put(
        f"/recurring-invoices/{created['id']}",
        json=template_body(client_id, frequency="WEEKLY", interval=2, start_at="2024-01-01T00:00:00Z"),
        headers=auth(token),
    )
    assert slower.json()["next_due_at"].startswith("2024-01-22T00:00:00")

    later = client.put(
        f"/recurring-invoices/{created['id']}",
        json=template_body(client_id, frequency="WEEKLY", start_at="2024-02-05T00:00:00Z"),
        headers=auth(token),
    )
    assert later.json()["next_due_at"].startswith("2024-02-12T00:00:00")
