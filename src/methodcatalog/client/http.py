"""Thin async HTTP layer over httpx for the catalog service."""

from __future__ import annotations

import json
from typing import Any

import httpx
import structlog

from methodcatalog.config.constants import API_ROUTE_PREFIX, REQUEST_ID_HEADER
from methodcatalog.config.models import ApiConfig
from methodcatalog.core.errors import RemoteIOError
from methodcatalog.core.logging import get_request_id

logger = structlog.get_logger()


class ApiClient:
    """Sends requests to ``{base_url}api/{version}/...`` and decodes JSON bodies.

    Any non-2xx status or transport failure raises ``RemoteIOError``. A 2xx
    response with an empty or ``null`` body decodes to ``None``.
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or ApiConfig()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_sec,
            verify=self.config.verify_tls,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @property
    def prefix(self) -> str:
        return f"{API_ROUTE_PREFIX}/{self.config.api_version}"

    def url_for(self, *segments: str | int) -> str:
        return "/".join([self.prefix, *(str(s) for s in segments)])

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> Any:
        headers: dict[str, str] = {}
        request_id = get_request_id()
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id

        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json_body,
                headers=headers,
            )
        except httpx.RequestError as e:
            logger.warning("remote_request_failed", method=method, path=path, error=str(e))
            raise RemoteIOError.transport(method, path, str(e) or type(e).__name__) from e

        if not response.is_success:
            logger.warning(
                "remote_bad_status",
                method=method,
                path=path,
                status_code=response.status_code,
            )
            raise RemoteIOError.bad_status(
                method, path, response.status_code, response.reason_phrase
            )

        logger.debug("remote_response", method=method, path=path, status_code=response.status_code)
        if not response.content.strip():
            return None
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise RemoteIOError.bad_payload(path, str(e)) from e

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
