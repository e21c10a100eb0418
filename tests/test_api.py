from __future__ import annotations

import httpx
import pytest_asyncio

from app.config import Settings
from app.main import create_app

ALICE = {"X-User-ID": "alice"}
BOB = {"X-User-ID": "bob"}


@pytest_asyncio.fixture
async def client(session_factory):
    application = create_app(
        Settings(DATABASE_URL="sqlite+aiosqlite://", DATABASE_URL_SYNC="sqlite://")
    )
    # The lifespan does not run under ASGITransport; point the app at the test database
    application.state.session_factory = session_factory
    transport = httpx.ASGITransport(app=application)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_request_id_is_echoed(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


async def test_missing_identity_is_rejected_before_validation(client):
    response = await client.post("/api/v1/templates", json={})
    assert response.status_code == 401


async def test_invalid_body_is_422(client):
    response = await client.post("/api/v1/templates", json={"name": "", "body": "x"}, headers=ALICE)
    assert response.status_code == 422


async def test_system_template_is_visible_to_other_users(client):
    created = await client.post(
        "/api/v1/templates", json={"name": "NDA", "body": "...", "is_system": True}, headers=ALICE
    )
    assert created.status_code == 201
    assert created.json()["owner_id"] is None

    listed = await client.get("/api/v1/templates", headers=BOB)

    assert [t["name"] for t in listed.json()] == ["NDA"]


async def test_update_foreign_template_is_404(client):
    created = await client.post("/api/v1/templates", json={"name": "Mine", "body": "..."}, headers=ALICE)

    response = await client.patch(
        f"/api/v1/templates/{created.json()['id']}", json={"name": "Stolen"}, headers=BOB
    )

    assert response.status_code == 404


async def test_contract_lifecycle(client):
    created = await client.post(
        "/api/v1/contracts",
        json={"title": "T", "final_text": "F", "effective_date": "2026-03-01"},
        headers=ALICE,
    )
    assert created.status_code == 201
    contract_id = created.json()["id"]

    fetched = await client.get(f"/api/v1/contracts/{contract_id}", headers=ALICE)
    assert fetched.status_code == 200
    assert fetched.json()["contract"]["title"] == "T"
    assert fetched.json()["clauses"] == []

    updated = await client.patch(f"/api/v1/contracts/{contract_id}", json={"status": "sent"}, headers=ALICE)
    assert updated.json()["status"] == "sent"
    assert updated.json()["title"] == "T"

    deleted = await client.delete(f"/api/v1/contracts/{contract_id}", headers=ALICE)
    assert deleted.status_code == 200
    assert deleted.json()["id"] == contract_id

    missing = await client.get(f"/api/v1/contracts/{contract_id}", headers=ALICE)
    assert missing.status_code == 404


async def test_empty_patch_keeps_updated_at(client):
    created = await client.post("/api/v1/contracts", json={"title": "T", "final_text": "F"}, headers=ALICE)

    response = await client.patch(f"/api/v1/contracts/{created.json()['id']}", json={}, headers=ALICE)

    assert response.status_code == 200
    assert response.json()["updated_at"] == created.json()["updated_at"]


async def test_other_users_cannot_see_or_delete_contract(client):
    created = await client.post("/api/v1/contracts", json={"title": "T", "final_text": "F"}, headers=ALICE)
    contract_id = created.json()["id"]

    assert (await client.get(f"/api/v1/contracts/{contract_id}", headers=BOB)).status_code == 404
    assert (await client.delete(f"/api/v1/contracts/{contract_id}", headers=BOB)).status_code == 404
    assert (await client.get("/api/v1/contracts", headers=BOB)).json() == []
    assert (await client.get(f"/api/v1/contracts/{contract_id}", headers=ALICE)).status_code == 200


async def test_create_contract_with_foreign_template_is_404(client):
    template = await client.post("/api/v1/templates", json={"name": "Private", "body": "..."}, headers=ALICE)

    response = await client.post(
        "/api/v1/contracts",
        json={"template_id": template.json()["id"], "title": "T", "final_text": "F"},
        headers=BOB,
    )

    assert response.status_code == 404
    assert (await client.get("/api/v1/contracts", headers=BOB)).json() == []


async def test_clause_upsert_and_delete(client):
    created = await client.post("/api/v1/contracts", json={"title": "T", "final_text": "F"}, headers=ALICE)
    contract_id = created.json()["id"]

    first = await client.put(
        f"/api/v1/contracts/{contract_id}/clauses",
        json={"order_index": 1, "body": "Pay within 30 days", "clause_key": "payment"},
        headers=ALICE,
    )
    assert first.status_code == 200
    clause_id = first.json()["id"]

    await client.put(
        f"/api/v1/contracts/{contract_id}/clauses",
        json={"id": clause_id, "order_index": 1, "body": "Pay within 15 days"},
        headers=ALICE,
    )

    clauses = (await client.get(f"/api/v1/contracts/{contract_id}", headers=ALICE)).json()["clauses"]
    assert [(c["id"], c["body"]) for c in clauses] == [(clause_id, "Pay within 15 days")]

    deleted = await client.delete(f"/api/v1/contracts/{contract_id}/clauses/{clause_id}", headers=ALICE)
    assert deleted.status_code == 200
    again = await client.delete(f"/api/v1/contracts/{contract_id}/clauses/{clause_id}", headers=ALICE)
    assert again.status_code == 404


async def test_clause_order_index_must_be_positive(client):
    created = await client.post("/api/v1/contracts", json={"title": "T", "final_text": "F"}, headers=ALICE)

    response = await client.put(
        f"/api/v1/contracts/{created.json()['id']}/clauses",
        json={"order_index": 0, "body": "x"},
        headers=ALICE,
    )

    assert response.status_code == 422


async def test_long_title_and_large_order_index_are_accepted(client):
    created = await client.post(
        "/api/v1/contracts", json={"title": "T" * 501, "final_text": "F"}, headers=ALICE
    )
    assert created.status_code == 201
    contract_id = created.json()["id"]

    clause = await client.put(
        f"/api/v1/contracts/{contract_id}/clauses",
        json={"id": "", "order_index": 3_000_000_000, "body": "x"},
        headers=ALICE,
    )

    assert clause.status_code == 200
    assert clause.json()["order_index"] == 3_000_000_000
    contract = (await client.get(f"/api/v1/contracts/{contract_id}", headers=ALICE)).json()["contract"]
    assert len(contract["title"]) == 501


async def test_order_index_beyond_64_bits_is_422(client):
    created = await client.post("/api/v1/contracts", json={"title": "T", "final_text": "F"}, headers=ALICE)

    response = await client.put(
        f"/api/v1/contracts/{created.json()['id']}/clauses",
        json={"order_index": 2**63, "body": "x"},
        headers=ALICE,
    )

    assert response.status_code == 422
