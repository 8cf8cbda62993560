"""Unit tests for the chat service."""
import pytest

from conftest import FakeProvider

from nova.application.services import ChatService, fallback_message
from nova.application.services.chat_service import (
    GENERIC_FAILURE_MESSAGE,
    MODEL_NOT_FOUND_MESSAGE,
    RATE_LIMIT_MESSAGE,
    STREAM_INTERRUPTED_MESSAGE,
)


async def _collect(stream) -> list[str]:
    return [chunk async for chunk in stream]


class TestFallbackMessage:
    """Tests for mapping provider status codes to user-facing text."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            (429, RATE_LIMIT_MESSAGE),
            (404, MODEL_NOT_FOUND_MESSAGE),
            (500, GENERIC_FAILURE_MESSAGE),
            (401, GENERIC_FAILURE_MESSAGE),
            (None, GENERIC_FAILURE_MESSAGE),
        ],
    )
    def test_mapping(self, status, expected):
        assert fallback_message(status) == expected


class TestReply:
    """Tests for ChatService.reply."""

    @pytest.mark.asyncio
    async def test_returns_generated_text(self, fake_provider):
        service = ChatService(fake_provider)

        assert await service.reply("Hi") == "Hello there!"

    @pytest.mark.asyncio
    async def test_sends_truncated_history(self, fake_provider, history):
        service = ChatService(fake_provider)

        await service.reply("next", history)

        prompt = fake_provider.prompts[-1]
        assert "User: turn 0\n" not in prompt
        assert "User: turn 2\n" in prompt
        assert prompt.endswith("User: next\nNova:")

    @pytest.mark.asyncio
    async def test_window_is_configurable(self, fake_provider, history):
        service = ChatService(fake_provider, window=2)

        await service.reply("next", history)

        assert "turn 9\n" not in fake_provider.prompts[-1]
        assert "User: turn 10\n" in fake_provider.prompts[-1]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 404, 500, None])
    async def test_provider_error_becomes_fallback(self, status):
        service = ChatService(FakeProvider(fail_status=status, fail=True))

        assert await service.reply("Hi") == fallback_message(status)


class TestStreamReply:
    """Tests for ChatService.stream_reply."""

    @pytest.mark.asyncio
    async def test_relays_chunks_in_order(self, fake_provider):
        service = ChatService(fake_provider)

        assert await _collect(service.stream_reply("Hi")) == ["Hello", " there", "!"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [429, 404, 503, None])
    async def test_failure_before_first_chunk_matches_reply(self, status):
        provider = FakeProvider(fail_status=status, fail=True, fail_after=0)
        service = ChatService(provider)

        chunks = await _collect(service.stream_reply("Hi"))

        assert chunks == [await service.reply("Hi")]

    @pytest.mark.asyncio
    async def test_failure_mid_stream_appends_apology(self):
        service = ChatService(FakeProvider(fail_status=500, fail_after=2))

        chunks = await _collect(service.stream_reply("Hi"))

        assert chunks == ["Hello", " there", STREAM_INTERRUPTED_MESSAGE]

    @pytest.mark.asyncio
    async def test_failure_after_last_chunk_appends_apology(self):
        service = ChatService(FakeProvider(fail_status=429, fail_after=3))

        chunks = await _collect(service.stream_reply("Hi"))

        assert chunks[-1] == STREAM_INTERRUPTED_MESSAGE
        assert "".join(chunks[:-1]) == "Hello there!"
