"""
Thin ``httpx`` wrapper shared by every client service.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from clothing_client.config import ClientConfig
from clothing_client.errors import ApiError
from clothing_client.session import TOKEN_KEY, SessionStore

logger = logging.getLogger("clothing.client")


class ApiClient:
    """Sends JSON requests to the store API.

    A stored access token is attached as ``Authorization: Bearer <token>``.
    Non-2xx responses raise :class:`ApiError` carrying the server's
    ``message``. Transport failures propagate as ``httpx`` exceptions.

    Args:
        config: Base URL and timeout. Defaults to :meth:`ClientConfig.from_env`.
        session: Session store for the token. Defaults to one at ``config.session_path``.
        transport: Optional ``httpx`` transport, used by tests.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: SessionStore | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig.from_env()
        self.session = session or SessionStore(self.config.session_path)
        self._http = httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def _headers(self) -> dict[str, str]:
        token = self.session.get_item(TOKEN_KEY)
        return {"Authorization": f"Bearer {token}"} if token else {}

    def request(self, method: str, path: str, *, json: Any = None, params: dict | None = None) -> Any:
        if params:
            params = {key: value for key, value in params.items() if value is not None}
        response = self._http.request(
            method,
            path.lstrip("/"),
            json=json,
            params=params or None,
            headers=self._headers(),
        )
        logger.debug("%s %s -> %s", method, path, response.status_code)

        if response.status_code == 204 or not response.content:
            body = None
        else:
            try:
                body = response.json()
            except ValueError:
                body = None

        if response.is_error:
            message = body.get("message") if isinstance(body, dict) else None
            raise ApiError(response.status_code, message or response.reason_phrase or "Request failed", payload=body)
        return body

    def get(self, path: str, **params) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Any = None) -> Any:
        return self.request("POST", path, json=payload if payload is not None else {})

    def put(self, path: str, payload: Any = None) -> Any:
        return self.request("PUT", path, json=payload if payload is not None else {})

    def patch(self, path: str, payload: Any = None) -> Any:
        return self.request("PATCH", path, json=payload if payload is not None else {})

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
