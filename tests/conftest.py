"""Shared fixtures: an application on an in-memory store with a fake validation service."""

import itertools

import pytest
from fastapi.testclient import TestClient

from library_api.app.api.deps import get_validator
from library_api.app.core.config import Settings
from library_api.app.core.errors import ValidationServiceUnavailable
from library_api.app.main import create_app


class FakeValidator:
    """Stands in for ContactValidator; every value is valid unless listed."""

    def __init__(self):
        self.invalid_phones = set()
        self.invalid_emails = set()
        self.unavailable = False
        self.calls = []

    async def is_valid_phone(self, number):
        self.calls.append(("phone", number))
        if self.unavailable:
            raise ValidationServiceUnavailable()
        return number not in self.invalid_phones

    async def is_valid_email(self, address):
        self.calls.append(("email", address))
        if self.unavailable:
            raise ValidationServiceUnavailable()
        return address not in self.invalid_emails

    async def aclose(self):
        pass


@pytest.fixture
def settings():
    return Settings(database_url=":memory:", api_key="test-key", log_level="WARNING")


@pytest.fixture
def validator():
    return FakeValidator()


@pytest.fixture
def app(settings, validator):
    app = create_app(settings)
    app.dependency_overrides[get_validator] = lambda: validator
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def stores(app, client):
    return app.state.stores


@pytest.fixture
def create_member(client):
    counter = itertools.count(1)

    def _create(**overrides):
        n = next(counter)
        body = {
            "name": f"Member {n}",
            "phone": f"+3460000{n:04d}",
            "email": f"member{n}@example.com",
            "address": f"Calle Mayor {n}",
        }
        body.update(overrides)
        response = client.post("/members", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_book(client):
    counter = itertools.count(1)

    def _create(**overrides):
        n = next(counter)
        body = {"title": f"Book {n}", "author": "Author", "isbn": f"978-{n:010d}", "year": 2000 + n}
        body.update(overrides)
        response = client.post("/books", json=body)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def borrow(client):
    def _borrow(member_id, book_id, start, end):
        return client.post(
            "/borrows",
            json={"memberId": member_id, "bookId": book_id, "startDate": start, "endDate": end},
        )

    return _borrow
