import logging
from typing import AsyncIterator, Optional, Sequence

from ...domain.entities import ChatMessage
from ...domain.repositories import LLMProviderInterface
from ...infrastructure.llm_providers import ProviderError
from ...infrastructure.observability import create_trace, end_trace, flush_langfuse
from .prompt_builder import DEFAULT_HISTORY_WINDOW, build_prompt

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = (
    "I'm sorry, but we've hit the API rate limit. Please try again in a few moments."
)
MODEL_NOT_FOUND_MESSAGE = (
    "I'm having trouble connecting to my AI capabilities. "
    "This could be due to an invalid model configuration."
)
GENERIC_FAILURE_MESSAGE = (
    "I apologize, but I'm experiencing technical difficulties at the moment. "
    "Please try again later."
)
STREAM_INTERRUPTED_MESSAGE = (
    "\n\nI'm sorry, but I encountered an error while generating a response. "
    "Please try again later."
)


def fallback_message(status_code: Optional[int]) -> str:
    """Map a provider status code to the text shown to the user instead of a reply."""
    if status_code == 429:
        return RATE_LIMIT_MESSAGE
    if status_code == 404:
        return MODEL_NOT_FOUND_MESSAGE
    return GENERIC_FAILURE_MESSAGE


class ChatService:
    """Turns a user message plus recent history into a Nova reply."""

    def __init__(
        self,
        provider: LLMProviderInterface,
        window: int = DEFAULT_HISTORY_WINDOW,
    ):
        self.provider = provider
        self.window = window

    def _trace(self, name: str, message: str, history: Sequence[ChatMessage],
               session_id: Optional[str]):
        return create_trace(
            name=name,
            session_id=session_id,
            metadata={
                "message_preview": message[:100],
                "history_length": len(history),
            },
            tags=["chat", "nova"],
        )

    async def reply(
        self,
        message: str,
        history: Sequence[ChatMessage] = (),
        session_id: Optional[str] = None,
    ) -> str:
        """Generate a complete reply. Provider failures come back as fallback text."""
        prompt = build_prompt(message, history, self.window)
        trace = self._trace("nova-chat", message, history, session_id)

        try:
            result = await self.provider.generate(prompt, trace=trace)
            return result.response
        except ProviderError as e:
            logger.warning("Provider call failed (status=%s): %s", e.status_code, e)
            return fallback_message(e.status_code)
        finally:
            end_trace(trace)
            flush_langfuse()

    async def stream_reply(
        self,
        message: str,
        history: Sequence[ChatMessage] = (),
        session_id: Optional[str] = None,
    ) -> AsyncIterator[str]:
        """Relay the provider's chunks as they arrive.

        A failure before the first chunk yields the same fallback text
        ``reply`` would return; a failure mid-stream appends a short apology.
        """
        prompt = build_prompt(message, history, self.window)
        trace = self._trace("nova-chat-stream", message, history, session_id)
        relayed = 0

        try:
            async for chunk in self.provider.stream(prompt, trace=trace):
                relayed += 1
                yield chunk
        except ProviderError as e:
            logger.warning(
                "Provider stream failed after %d chunks (status=%s): %s",
                relayed, e.status_code, e,
            )
            yield fallback_message(e.status_code) if relayed == 0 else STREAM_INTERRUPTED_MESSAGE
        finally:
            end_trace(trace)
            flush_langfuse()
