"""
Outbound Client Test Fixtures
Shared fixtures for all test modules.

Upstream APIs are never contacted: every client under test is built with an
``httpx.MockTransport`` whose responses are scripted per test.
"""
import json
import logging
from typing import Any, Callable, List, Union
from unittest.mock import AsyncMock

import httpx
import pytest

from outbound.clients import emailbison, hq_data
from outbound.clients.emailbison import EmailBisonClient, create_client
from outbound.clients.hq_data import HQDataClient, create_hq_client
from outbound.config import ClientConfig, HQClientConfig

BASE_URL = "https://api.test"
HQ_BASE_URL = "https://hq.test"
TEST_API_KEY = "test-key-123"

_ENV_VARS = (
    "EMAILBISON_API_KEY",
    "EMAILBISON_BASE_URL",
    "EMAILBISON_TIMEOUT_MS",
    "EMAILBISON_MAX_RETRIES",
    "EMAILBISON_DEBUG",
    "EMAILBISON_ENV",
    "APP_ENV",
    "HQ_DATA_API_URL",
    "HQ_DATA_BASE_URL",
    "HQ_DATA_TIMEOUT_MS",
    "HQ_DATA_DEBUG",
    "HQ_DATA_ENV",
)

ScriptedItem = Union[tuple, Exception, Callable[[httpx.Request], httpx.Response]]


class ScriptedUpstream:
    """Replays queued responses in order; the last one repeats once the queue is drained.

    Queue entries are ``(status, json_body)`` tuples, ``(status, None)`` for an
    empty body, ``(status, "raw text")`` for a non-JSON body, exceptions to raise
    from the transport, or callables taking the request.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self._script: List[ScriptedItem] = []

    def queue(self, *items: ScriptedItem) -> "ScriptedUpstream":
        self._script.extend(items)
        return self

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._script:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._script.pop(0) if len(self._script) > 1 else self._script[0]

        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)

        status, body = item
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


# ============================================================
# Environment isolation
# ============================================================

@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Clear client env vars and cached singletons around every test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of the settings
    monkeypatch.chdir(tmp_path)
    emailbison.reset_client()
    hq_data.reset_hq_client()
    yield
    emailbison.reset_client()
    hq_data.reset_hq_client()


@pytest.fixture
def restore_root_logger():
    """Undo root-logger changes made by setup_structured_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


# ============================================================
# Clients
# ============================================================

@pytest.fixture
def upstream() -> ScriptedUpstream:
    return ScriptedUpstream()


@pytest.fixture
def make_client(upstream) -> Callable[..., EmailBisonClient]:
    """Factory for EmailBison clients wired to the scripted upstream.

    Backoff waits are replaced with an AsyncMock so retry tests run instantly
    and can inspect the requested delays.
    """

    def _make(**overrides) -> EmailBisonClient:
        config = ClientConfig(api_key=TEST_API_KEY, base_url=BASE_URL, **overrides)
        client = create_client(config, transport=upstream.transport)
        client._wait = AsyncMock()
        return client

    return _make


@pytest.fixture
def client(make_client) -> EmailBisonClient:
    return make_client()


@pytest.fixture
def hq_client(upstream) -> HQDataClient:
    return create_hq_client(HQClientConfig(base_url=HQ_BASE_URL), transport=upstream.transport)


@pytest.fixture
def installed_clients(monkeypatch, client, hq_client):
    """Install the scripted clients as the process-wide singletons."""
    monkeypatch.setattr(emailbison, "_default_client", client)
    monkeypatch.setattr(hq_data, "_default_client", hq_client)
    return client, hq_client


# ============================================================
# Markers for test categorization
# ============================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external deps)")
    config.addinivalue_line("markers", "slow: Tests taking >1 second")
