"""Pytest configuration and fixtures."""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import httpx
import pytest

from decodedesk.quota.manager import QuotaManager
from decodedesk.quota.storage import MemoryQuotaStorage
from decodedesk.translation.backends.openrouter_backend import OpenRouterBackend
from decodedesk.translation.client import TranslationClient


class FakeClock:
    """Settable clock for quota window tests."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def completion_body(content, model="deepseek/deepseek-r1-0528-qwen3-8b:free"):
    """Minimal OpenAI-compatible chat completion payload."""
    return {
        "id": "gen-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": model,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop"
            }
        ],
        "usage": {"prompt_tokens": 120, "completion_tokens": 30, "total_tokens": 150}
    }


class ScriptedProvider:
    """
    httpx handler that replays a script of replies.

    Each entry is a reply string (200 with that content), an int status
    code, or an exception instance to raise. The last entry repeats.
    """

    def __init__(self, *script):
        self.script = list(script)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.script[min(len(self.requests), len(self.script)) - 1]
        if isinstance(step, Exception):
            raise step
        if isinstance(step, int):
            return httpx.Response(step, json={"error": {"message": "provider said no", "code": step}})
        return httpx.Response(200, json=completion_body(step))

    @property
    def calls(self) -> int:
        return len(self.requests)

    def sent_payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def clock():
    """Clock starting Wednesday 2024-03-06 12:00 UTC."""
    return FakeClock(datetime(2024, 3, 6, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage():
    return MemoryQuotaStorage()


@pytest.fixture
def manager(storage, clock):
    return QuotaManager(storage, clock=clock)


@pytest.fixture
def sleeps():
    """Delays requested by the retry loop."""
    return []


@pytest.fixture
def make_backend(sleeps):
    """Factory for an OpenRouterBackend whose HTTP calls go to a ScriptedProvider."""

    async def async_sleep(seconds):
        sleeps.append(seconds)

    def _make(provider: ScriptedProvider, api_key: str = "test-key", **kwargs) -> OpenRouterBackend:
        transport = httpx.MockTransport(provider)
        return OpenRouterBackend(
            api_key=api_key,
            base_url="https://openrouter.test/api/v1",
            http_client=httpx.Client(transport=transport),
            async_http_client=httpx.AsyncClient(transport=transport),
            sleep=sleeps.append,
            async_sleep=async_sleep,
            **kwargs
        )

    return _make


@pytest.fixture
def make_client(make_backend):
    def _make(provider: ScriptedProvider, **kwargs) -> TranslationClient:
        return TranslationClient(make_backend(provider, **kwargs))

    return _make


@pytest.fixture(autouse=True)
def _no_ambient_credentials(monkeypatch):
    """Keep a developer's real key or endpoint out of the tests."""
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)
    monkeypatch.delenv("OPENROUTER_BASE_URL", raising=False)
    monkeypatch.delenv("DECODEDESK_MODEL", raising=False)
    monkeypatch.delenv("DECODEDESK_STORAGE_DIR", raising=False)
    monkeypatch.delenv("DECODEDESK_LOG_LEVEL", raising=False)


@pytest.fixture
def scripted():
    """The ScriptedProvider class, for building per-test reply scripts."""
    return ScriptedProvider
