import json
import os
from typing import Any, Dict, Iterator, List, Optional, Tuple

import httpx
import pytest

from pivnet.client import API_PREFIX, Client
from pivnet.config import ClientConfig


class FakeApi:
    """In-memory stand-in for the API server.

    Routes are keyed by method and path (without the /api/v2 prefix); every
    request is recorded so tests can assert on headers and bodies.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], Tuple[int, Any, Optional[bytes]]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        self.routes[(method, f"{API_PREFIX}{path}")] = (status, json_body, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "no route"})
        status, json_body, content = route
        if content is not None:
            return httpx.Response(status, content=content)
        if json_body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=json_body)

    def client(self, **overrides: Any) -> Client:
        values: Dict[str, Any] = {"host": "http://pivnet.test", "api_token": "my-auth-token"}
        values.update(overrides)
        return Client(ClientConfig(**values), transport=httpx.MockTransport(self.handler))

    def body(self, index: int = -1) -> Optional[Any]:
        content = self.requests[index].content
        return json.loads(content) if content else None

    def paths(self) -> List[str]:
        return [f"{request.method} {request.url.path}" for request in self.requests]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("PIVNET_"):
            monkeypatch.delenv(key)


@pytest.fixture
def api() -> FakeApi:
    """Create a fake API server with no routes."""
    return FakeApi()


@pytest.fixture
def client(api: FakeApi) -> Iterator[Client]:
    """Create a client wired to the fake API server."""
    with api.client() as client:
        yield client
