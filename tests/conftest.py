from __future__ import annotations

import json

import httpx
import pytest

from api.state import AppState
from medisync.config import Config

API_URL = "http://backend.test/api"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def cfg() -> Config:
    return Config(api_url=API_URL)


class Backend:
    """Records requests and answers from a {(method, path): response} table."""

    def __init__(self, routes: dict) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": "not found"})
        answer = self.routes[key]
        if isinstance(answer, httpx.Response):
            return answer
        return httpx.Response(200, json=answer)

    def body(self, index: int = -1):
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_state(cfg):
    def _make(routes: dict) -> tuple[AppState, Backend]:
        backend = Backend(routes)
        state = AppState(cfg)
        state.load(transport=httpx.MockTransport(backend))
        return state, backend

    return _make
