"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages, and
provides an in-memory stand-in for the remote catalog service.
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local methodcatalog package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

import httpx  # noqa: E402

from methodcatalog.client.endpoint import CatalogClient  # noqa: E402
from methodcatalog.client.http import ApiClient  # noqa: E402
from methodcatalog.config.models import ApiConfig  # noqa: E402

BASE_URL = "http://catalog.test/"


class FakeService:
    """Canned responses per (method, path), served through httpx.MockTransport."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, Any, float]] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        payload: Any = None,
        *,
        status: int = 200,
        delay: float = 0.0,
    ) -> None:
        """Register a response. ``path`` is relative to ``api/v1/``; bytes are sent as-is."""
        self.routes[(method, f"/api/v1/{path}")] = (status, payload, delay)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"title": "Not Found"})
        status, payload, delay = self.routes[key]
        if delay:
            await asyncio.sleep(delay)
        if payload is None:
            return httpx.Response(status)
        if isinstance(payload, bytes):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, content=json.dumps(payload).encode())

    def calls(self, method: str, path: str) -> int:
        full = f"/api/v1/{path}"
        return sum(1 for r in self.requests if r.method == method and r.url.path == full)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)

    def api(self) -> ApiClient:
        return ApiClient(
            ApiConfig(base_url=BASE_URL),
            transport=httpx.MockTransport(self.handler),
        )

    def client(self) -> CatalogClient:
        return CatalogClient(api=self.api())


@pytest.fixture
def service() -> FakeService:
    return FakeService()


# Wire payloads, shaped like the service's camelCase JSON


@pytest.fixture
def family_payload() -> dict[str, Any]:
    """MethodFamily 3 "DFT"."""
    return {
        "id": 3,
        "name": "DFT",
        "descriptionRtf": None,
        "descriptionText": None,
        "createdDate": "2024-01-02T03:04:05",
        "lastUpdatedDate": "2024-01-02T03:04:05",
        "archived": False,
    }


@pytest.fixture
def base_method_payload(family_payload: dict[str, Any]) -> dict[str, Any]:
    """BaseMethod 7 "B3LYP" in family 3."""
    return {
        "id": 7,
        "keyword": "B3LYP",
        "methodFamily": family_payload,
        "descriptionRtf": "<p>Hybrid functional</p>",
        "descriptionText": "Hybrid functional",
        "createdDate": "2024-01-02T03:04:05",
        "lastUpdatedDate": "2024-01-02T03:04:05",
        "archived": False,
    }
