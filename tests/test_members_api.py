"""Tests for member registration, updates and deletion."""

import httpx
from fastapi.testclient import TestClient

from library_api.app.api.deps import get_validator
from library_api.app.services.contact_validator import ContactValidator

MISSING_ID = "0" * 32


def test_create_member(client):
    response = client.post(
        "/members",
        json={"name": "Ana", "phone": "111", "email": "a@x.com", "address": "Calle Mayor 1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ana"
    assert body["phone"] == "111"
    assert body["email"] == "a@x.com"
    assert body["address"] == "Calle Mayor 1"
    assert body["borrows"] == []


def test_duplicate_phone_or_email_rejected(client, create_member):
    create_member(phone="111", email="a@x.com")

    response = client.post("/members", json={"name": "B", "phone": "111", "email": "b@x.com", "address": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Duplicate phone or email"}

    response = client.post("/members", json={"name": "B", "phone": "222", "email": "a@x.com", "address": "x"})
    assert response.status_code == 400


def test_missing_fields(client):
    response = client.post("/members", json={"name": "Ana", "phone": "111", "email": "", "address": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_invalid_contact_rejected(client, validator):
    validator.invalid_phones.add("000")
    validator.invalid_emails.add("nobody@nowhere")

    response = client.post("/members", json={"name": "A", "phone": "000", "email": "a@x.com", "address": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid phone"}

    response = client.post("/members", json={"name": "A", "phone": "111", "email": "nobody@nowhere", "address": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email"}

    assert client.get("/members").json() == []


def test_validation_service_unavailable(client, validator):
    validator.unavailable = True
    response = client.post("/members", json={"name": "A", "phone": "111", "email": "a@x.com", "address": "x"})
    assert response.status_code == 500
    assert response.json() == {"error": "Validation service unavailable"}


def test_list_members_filters_by_name(client, create_member):
    create_member(name="Ana")
    create_member(name="Luis")
    create_member(name="Ana")

    assert len(client.get("/members").json()) == 3
    names = [m["name"] for m in client.get("/members", params={"name": "Ana"}).json()]
    assert names == ["Ana", "Ana"]


def test_get_member(client, create_member, create_book, borrow):
    member = create_member()
    book = create_book(title="Rayuela")
    borrow(member["id"], book["id"], "2025-01-01", "2025-01-05")

    body = client.get("/member", params={"id": member["id"]}).json()

    assert body["id"] == member["id"]
    assert len(body["borrows"]) == 1
    embedded = body["borrows"][0]
    assert embedded["book"] == {"id": book["id"], "title": "Rayuela"}
    assert embedded["startDate"] == "2025-01-01"
    assert "member" not in embedded


def test_get_member_errors(client):
    response = client.get("/member")
    assert response.status_code == 400
    assert response.json() == {"error": "id is required"}

    response = client.get("/member", params={"id": MISSING_ID})
    assert response.status_code == 404
    assert response.json() == {"error": "Member not found"}

    assert client.get("/member", params={"id": "xyz"}).status_code == 400


def test_update_keeping_own_contact(client, create_member, validator):
    member = create_member(phone="111", email="a@x.com")
    validator.calls.clear()

    response = client.put(
        "/member",
        json={"id": member["id"], "name": "Ana María", "phone": "111", "email": "a@x.com", "address": "Nueva 2"},
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Ana María"
    assert response.json()["address"] == "Nueva 2"
    assert validator.calls == []


def test_update_changed_contact_is_checked(client, create_member, validator):
    create_member(phone="111", email="a@x.com")
    member = create_member(phone="222", email="b@x.com")
    update = {"id": member["id"], "name": "B", "phone": "111", "email": "b@x.com", "address": "x"}

    response = client.put("/member", json=update)
    assert response.status_code == 400
    assert response.json() == {"error": "Duplicate phone"}

    response = client.put("/member", json=dict(update, phone="222", email="a@x.com"))
    assert response.status_code == 400
    assert response.json() == {"error": "Duplicate email"}

    validator.invalid_phones.add("333")
    response = client.put("/member", json=dict(update, phone="333"))
    assert response.json() == {"error": "Invalid phone"}

    response = client.put("/member", json=dict(update, phone="444", email="c@x.com"))
    assert response.status_code == 200
    assert response.json()["phone"] == "444"
    assert ("phone", "444") in validator.calls
    assert ("email", "c@x.com") in validator.calls


def test_update_errors(client):
    response = client.put("/member", json={"id": MISSING_ID, "name": "A", "phone": "1", "email": "a@x.com", "address": "x"})
    assert response.status_code == 404

    response = client.put("/member", json={"id": MISSING_ID, "name": "A"})
    assert response.status_code == 400


def test_delete_member_cascades_to_borrows(client, create_member, create_book, borrow):
    member = create_member()
    other = create_member()
    first_book, second_book = create_book(), create_book()
    borrow(member["id"], first_book["id"], "2025-01-01", "2025-01-05")
    borrow(member["id"], second_book["id"], "2025-01-01", "2025-01-05")
    kept = borrow(other["id"], first_book["id"], "2025-02-01", "2025-02-05").json()

    response = client.request("DELETE", "/member", json={"id": member["id"]})

    assert response.status_code == 200
    assert response.json() == {"message": "Member deleted"}
    assert [b["id"] for b in client.get("/borrows").json()] == [kept["id"]]
    assert client.get("/member", params={"id": member["id"]}).status_code == 404
    assert all(m["id"] != member["id"] for m in client.get("/members").json())


def test_delete_member_errors(client):
    response = client.request("DELETE", "/member", json={"id": MISSING_ID})
    assert response.status_code == 404

    response = client.request("DELETE", "/member", json={})
    assert response.status_code == 400


def test_whitespace_address_is_present(client):
    response = client.post("/members", json={"name": "Ana", "phone": "111", "email": "a@x.com", "address": "  "})
    assert response.status_code == 201
    assert response.json()["address"] == "  "


def test_malformed_validation_answer(app):
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=["x"])))
    real_validator = ContactValidator(api_key="secret", base_url="https://validator.test/v1/", client=client)
    app.dependency_overrides[get_validator] = lambda: real_validator

    with TestClient(app) as test_client:
        response = test_client.post(
            "/members", json={"name": "A", "phone": "111", "email": "a@x.com", "address": "x"}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Validation service returned malformed data"}
        assert test_client.get("/members").json() == []
