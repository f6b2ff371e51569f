"""Tests for the validation service client against a mocked transport."""

import asyncio

import httpx
import pytest

from library_api.app.core.errors import ValidationServiceUnavailable
from library_api.app.services.contact_validator import ContactValidator


def make_validator(handler):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ContactValidator(api_key="secret", base_url="https://validator.test/v1/", client=client)


def test_phone_lookup():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"is_valid": True, "country": "ES"})

    validator = make_validator(handler)

    assert asyncio.run(validator.is_valid_phone("+34600111222")) is True
    assert seen[0].url.path == "/v1/validatephone"
    assert seen[0].url.params["number"] == "+34600111222"
    assert seen[0].headers["X-Api-Key"] == "secret"


def test_email_lookup():
    def handler(request):
        assert request.url.path == "/v1/validateemail"
        return httpx.Response(200, json={"is_valid": request.url.params["email"] == "a@x.com"})

    validator = make_validator(handler)

    assert asyncio.run(validator.is_valid_email("a@x.com")) is True
    assert asyncio.run(make_validator(handler).is_valid_email("bad")) is False


def test_error_status_is_unavailable():
    validator = make_validator(lambda request: httpx.Response(401, json={"error": "bad key"}))
    with pytest.raises(ValidationServiceUnavailable):
        asyncio.run(validator.is_valid_phone("111"))


def test_transport_error_is_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    validator = make_validator(handler)
    with pytest.raises(ValidationServiceUnavailable):
        asyncio.run(validator.is_valid_email("a@x.com"))


@pytest.mark.parametrize("payload", [["x"], None, "valid"])
def test_non_object_answer_is_unavailable(payload):
    validator = make_validator(lambda request: httpx.Response(200, json=payload))
    with pytest.raises(ValidationServiceUnavailable, match="malformed"):
        asyncio.run(validator.is_valid_phone("111"))
