"""Pytest configuration and shared fixtures."""
import json
import os
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Optional

import httpx
import pytest

# Keep tests offline: no tracing, no real credentials
os.environ["LANGFUSE_PUBLIC_KEY"] = ""
os.environ["LANGFUSE_SECRET_KEY"] = ""
os.environ["GEMINI_API_KEY"] = "test-key"

from fastapi.testclient import TestClient  # noqa: E402

from nova.application.services import ChatService  # noqa: E402
from nova.domain.entities import ChatMessage  # noqa: E402
from nova.infrastructure.llm_providers import (  # noqa: E402
    BaseLLMProvider,
    GeminiProvider,
    ProviderError,
)
from nova.infrastructure.persistence import InMemorySessionRepository  # noqa: E402
from nova.interfaces.api.routes import get_chat_service, get_session_repository  # noqa: E402
from nova.main import app  # noqa: E402


class FakeProvider(BaseLLMProvider):
    """Scripted provider: replays chunks, optionally failing at a given point."""

    def __init__(
        self,
        chunks: Optional[list[str]] = None,
        fail_status: Optional[int] = None,
        fail_after: int = 0,
        fail: bool = False,
    ):
        self.chunks = chunks if chunks is not None else ["Hello", " there", "!"]
        self.fail = fail or fail_status is not None
        self.fail_status = fail_status
        self.fail_after = fail_after
        self.prompts: list[str] = []

    @property
    def provider_id(self) -> str:
        return "fake"

    @property
    def name(self) -> str:
        return "Fake"

    @property
    def model(self) -> str:
        return "fake-model"

    async def is_available(self) -> bool:
        return True

    async def _call_api(self, prompt: str) -> tuple[str, int, int]:
        self.prompts.append(prompt)
        if self.fail:
            raise ProviderError("scripted failure", self.fail_status)
        text = "".join(self.chunks)
        return text, len(prompt.split()), len(text.split())

    async def _stream_api(self, prompt: str) -> AsyncIterator[str]:
        self.prompts.append(prompt)
        for i, chunk in enumerate(self.chunks):
            if self.fail and i == self.fail_after:
                raise ProviderError("scripted failure", self.fail_status)
            yield chunk
        if self.fail and self.fail_after >= len(self.chunks):
            raise ProviderError("scripted failure", self.fail_status)


def gemini_completion(text: str) -> dict:
    return {
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
        "usage": {"prompt_tokens": 12, "completion_tokens": 3},
    }


def gemini_sse(*chunks: str) -> bytes:
    events = [
        "data: " + json.dumps({"choices": [{"index": 0, "delta": {"content": c}}]})
        for c in chunks
    ]
    events.append("data: [DONE]")
    return ("\n\n".join(events) + "\n\n").encode()


def gemini_transport(status: int = 200, text: str = "Hi from Gemini", chunks=("Hi", " from", " Gemini")):
    """An httpx.MockTransport that answers like Gemini's chat completions endpoint."""
    def handler(request: httpx.Request) -> httpx.Response:
        if status != 200:
            return httpx.Response(status, json={"error": {"code": status, "message": "scripted"}})
        body = json.loads(request.content)
        if body.get("stream"):
            return httpx.Response(
                200,
                content=gemini_sse(*chunks),
                headers={"content-type": "text/event-stream"},
            )
        return httpx.Response(200, json=gemini_completion(text))

    return httpx.MockTransport(handler)


@pytest.fixture
def history():
    """Return twelve alternating turns, oldest first."""
    start = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    return [
        ChatMessage(
            role="user" if i % 2 == 0 else "assistant",
            content=f"turn {i}",
            timestamp=start + timedelta(minutes=i),
        )
        for i in range(12)
    ]


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def sessions():
    return InMemorySessionRepository()


@pytest.fixture
def make_client(sessions):
    """Build a TestClient whose chat service uses the given provider."""
    def _make(provider: BaseLLMProvider) -> TestClient:
        service = ChatService(provider)
        app.dependency_overrides[get_chat_service] = lambda: service
        app.dependency_overrides[get_session_repository] = lambda: sessions
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def gemini_client(make_client):
    """Build a TestClient backed by a GeminiProvider talking to a mock transport."""
    def _make(status: int = 200, **kwargs) -> TestClient:
        provider = GeminiProvider(api_key="test-key", transport=gemini_transport(status, **kwargs))
        return make_client(provider)

    return _make
