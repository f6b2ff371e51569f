"""
Client for the external phone and email validation service.

Members must have a plausible phone number and email address.  The
check is delegated to API Ninjas (``/validatephone`` and
``/validateemail``), which answers with a JSON object whose
``is_valid`` field is the verdict.  The key is sent in the
``X-Api-Key`` header.

Any answer other than HTTP 200, or a transport failure, raises
``ValidationServiceUnavailable``.  Calls are never retried; the
request that needed the verdict fails.
"""

import logging
from typing import Optional

import httpx

from library_api.app.core.errors import ValidationServiceUnavailable


logger = logging.getLogger(__name__)


class ContactValidator:
    """Asynchronous client for the validation oracle.

    The underlying ``httpx.AsyncClient`` is created lazily and reused
    for the lifetime of the application; call ``aclose`` on shutdown.
    A preconfigured client may be passed in, which is how the tests
    plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.api-ninjas.com/v1",
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def _fetch(self, path: str, params: dict) -> dict:
        url = f"{self.base_url}/{path}"
        try:
            response = await self.client.get(url, params=params, headers={"X-Api-Key": self.api_key})
        except httpx.HTTPError as exc:
            logger.warning("Validation service request to %s failed: %s", path, exc)
            raise ValidationServiceUnavailable() from exc
        if response.status_code != 200:
            logger.warning("Validation service answered %s for %s", response.status_code, path)
            raise ValidationServiceUnavailable()
        try:
            data = response.json()
        except ValueError as exc:
            raise ValidationServiceUnavailable("Validation service returned malformed data") from exc
        if not isinstance(data, dict):
            logger.warning("Validation service returned %s instead of an object for %s", type(data).__name__, path)
            raise ValidationServiceUnavailable("Validation service returned malformed data")
        return data

    async def is_valid_phone(self, number: str) -> bool:
        data = await self._fetch("validatephone", {"number": number})
        return bool(data.get("is_valid"))

    async def is_valid_email(self, address: str) -> bool:
        data = await self._fetch("validateemail", {"email": address})
        return bool(data.get("is_valid"))

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
