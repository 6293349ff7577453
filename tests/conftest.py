"""
Pytest fixtures for gateway service tests
"""

from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from gateway_service.utils.config import GatewayConfig


class RecordingSink:
    """Event sink that keeps every emitted event for assertions"""

    def __init__(self):
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def info(self, event: str, **fields: Any) -> None:
        self.events.append(("info", event, fields))

    def error(self, event: str, **fields: Any) -> None:
        self.events.append(("error", event, fields))

    def names(self) -> List[str]:
        return [name for _, name, _ in self.events]

    def get(self, name: str) -> Dict[str, Any]:
        for _, event, fields in self.events:
            if event == name:
                return fields
        raise KeyError(name)


class UpstreamRecorder:
    """MockTransport handler that records requests and replies with a canned response"""

    def __init__(self, responder: Callable[[httpx.Request], Any]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responder(request)
        if hasattr(response, "__await__"):
            response = await response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def gateway_config() -> GatewayConfig:
    """Configuration isolated from the process environment"""
    return GatewayConfig(
        _env_file=None,
        backend_api_url="http://backend.test:3001",
        api_token="secret-token",
        raw_fetch_timeout_seconds=15.0,
        upstream_timeout_seconds=30.0,
        pastebin_base_url="https://pastebin.com/raw",
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_upstream():
    """Build (recorder, client) pairs around a responder function"""
    def _make(responder: Callable[[httpx.Request], Any]):
        recorder = UpstreamRecorder(responder)
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder), follow_redirects=True)
        return recorder, client
    return _make
