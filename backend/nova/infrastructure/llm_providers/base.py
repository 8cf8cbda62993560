from abc import ABC, abstractmethod
import logging
import time
from typing import AsyncIterator, Optional, Any
from ...domain.entities import LLMResponse, MetricResult
from ..observability import observe_llm_call

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when the provider call fails.

    ``status_code`` is the HTTP status returned by the provider, or None when
    the request never got a response (timeouts, connection errors).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseLLMProvider(ABC):
    """Base class for LLM providers"""

    @property
    @abstractmethod
    def provider_id(self) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def model(self) -> str:
        pass

    @abstractmethod
    async def is_available(self) -> bool:
        pass

    @abstractmethod
    async def _call_api(self, prompt: str) -> tuple[str, int, int]:
        """
        Call the LLM API and return (response_text, input_tokens, output_tokens)
        """
        pass

    @abstractmethod
    def _stream_api(self, prompt: str) -> AsyncIterator[str]:
        """
        Call the LLM API in streaming mode and yield text chunks as they arrive
        """
        pass

    def _record(self, trace, name, prompt, response, input_tokens, output_tokens,
                start_time, error=None, metadata=None):
        latency_ms = (time.perf_counter() - start_time) * 1000
        if trace:
            observe_llm_call(
                trace=trace,
                name=name,
                provider=self.provider_id,
                model=self.model,
                prompt=prompt,
                response=response,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
                latency_ms=latency_ms,
                error=error,
                metadata=metadata,
            )
        return latency_ms

    async def generate(
        self,
        prompt: str,
        trace: Optional[Any] = None,
    ) -> LLMResponse:
        """Generate a response from the LLM with metrics and optional Langfuse tracing."""
        start_time = time.perf_counter()
        name = f"{self.provider_id}/{self.model}"

        try:
            response_text, input_tokens, output_tokens = await self._call_api(prompt)
        except ProviderError as e:
            self._record(trace, name, prompt, "", 0, 0, start_time, error=str(e))
            raise
        except Exception as e:
            self._record(trace, name, prompt, "", 0, 0, start_time, error=str(e))
            raise ProviderError(f"{self.name} call failed: {e}") from e

        latency_ms = self._record(
            trace, name, prompt, response_text, input_tokens, output_tokens, start_time
        )
        tokens_per_second = (
            output_tokens / (latency_ms / 1000) if latency_ms > 0 else 0
        )
        logger.debug("%s answered in %.0fms", name, latency_ms)

        return LLMResponse(
            provider=self.provider_id,
            model=self.model,
            response=response_text,
            metrics=MetricResult(
                latency_ms=latency_ms,
                tokens_per_second=tokens_per_second,
                input_tokens=input_tokens,
                output_tokens=output_tokens,
            ),
        )

    async def stream(
        self,
        prompt: str,
        trace: Optional[Any] = None,
    ) -> AsyncIterator[str]:
        """Relay text chunks from the LLM in arrival order."""
        start_time = time.perf_counter()
        name = f"{self.provider_id}/{self.model}:stream"
        chunks: list[str] = []

        try:
            async for chunk in self._stream_api(prompt):
                chunks.append(chunk)
                yield chunk
        except ProviderError as e:
            self._record(trace, name, prompt, "".join(chunks), 0, 0, start_time, error=str(e))
            raise
        except Exception as e:
            self._record(trace, name, prompt, "".join(chunks), 0, 0, start_time, error=str(e))
            raise ProviderError(f"{self.name} stream failed: {e}") from e

        self._record(
            trace, name, prompt, "".join(chunks), 0, 0, start_time,
            metadata={"chunks": len(chunks)},
        )
