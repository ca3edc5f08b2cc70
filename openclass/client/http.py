# openclass/client/http.py
"""Thin async HTTP wrapper around the OpenClass REST API."""
from typing import Any, Dict, Optional
import logging

import httpx

from ..core.config import settings
from ..core.exceptions import ErrorKind

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call, classified with the shared error taxonomy."""

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        self.kind = kind
        self.message = message or kind.default_message
        self.status_code = status_code or kind.status_code
        self.details = details
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.kind.code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}

        kind = ErrorKind.from_code(body.get("code"))
        if kind is ErrorKind.INTERNAL:
            # Never surface raw server text for unclassified failures
            return cls(kind, status_code=response.status_code)

        message = body.get("error") or body.get("message")
        details = body.get("details") if kind is ErrorKind.VALIDATION else None
        return cls(kind, message, response.status_code, details)

    def __repr__(self) -> str:
        return f"ApiError({self.kind.name}, {self.message!r}, status={self.status_code})"


class ApiClient:
    """Explicitly constructed API client.

    ``token`` is sent as a bearer token and ``user_id`` as ``X-User-Id``.
    A 401 from the server clears both. Use as an async context manager or
    call ``aclose()`` when done.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        user_id: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.token = token
        self.user_id = user_id
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    def clear_credentials(self):
        self.token = None
        self.user_id = None

    def _headers(self) -> Dict[str, str]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        if self.user_id:
            headers["X-User-Id"] = self.user_id
        return headers

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
        files: Optional[Any] = None
    ) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            response = await self._client.request(
                method,
                path,
                params=params or None,
                json=json,
                files=files,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e!r}")
            raise ApiError(ErrorKind.INTERNAL) from e

        if response.is_success:
            return response.json()

        error = ApiError.from_response(response)
        logger.warning(f"{method} {path} -> {response.status_code} {error.code}")
        if error.kind is ErrorKind.AUTHENTICATION:
            self.clear_credentials()
        raise error

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None, files: Optional[Any] = None) -> Any:
        return await self.request("POST", path, json=json, files=files)

    async def put(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)
