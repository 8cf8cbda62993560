import json
import logging
from typing import AsyncIterator, Optional

import httpx
from .base import BaseLLMProvider, ProviderError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai"


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200] or str(response.status_code)
    # Gemini wraps errors either as {"error": {...}} or [{"error": {...}}]
    if isinstance(data, list) and data:
        data = data[0]
    if isinstance(data, dict):
        error = data.get("error", {})
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
    return response.text[:200]


def _status_error(response: httpx.Response, model: str) -> ProviderError:
    status = response.status_code
    detail = _error_detail(response)
    if status == 401:
        return ProviderError("Invalid Gemini API Key", status)
    if status == 404:
        return ProviderError(f"Model {model} not found or not available", status)
    if status == 429:
        return ProviderError(f"Gemini rate limit reached: {detail}", status)
    return ProviderError(f"Gemini API error: {status} - {detail}", status)


class GeminiProvider(BaseLLMProvider):
    """Gemini through its OpenAI-compatible chat completions endpoint"""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 120.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self._model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Lets tests route requests to an httpx.MockTransport
        self._transport = transport

    @property
    def provider_id(self) -> str:
        return "gemini"

    @property
    def name(self) -> str:
        return "Gemini"

    @property
    def model(self) -> str:
        return self._model

    async def is_available(self) -> bool:
        return bool(self.api_key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport, timeout=self.timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _payload(self, prompt: str, stream: bool) -> dict:
        return {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": stream,
        }

    async def _call_api(self, prompt: str) -> tuple[str, int, int]:
        async with self._client() as client:
            try:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers=self._headers(),
                    json=self._payload(prompt, stream=False),
                )
            except httpx.HTTPError as e:
                raise ProviderError(f"Could not reach Gemini: {e}") from e

            if response.is_error:
                raise _status_error(response, self._model)

            data = response.json()
            try:
                content = data["choices"][0]["message"]["content"] or ""
            except (KeyError, IndexError, TypeError) as e:
                raise ProviderError(f"Unexpected Gemini response shape: {e}") from e

            usage = data.get("usage") or {}
            input_tokens = usage.get("prompt_tokens", int(len(prompt.split()) * 1.3))
            output_tokens = usage.get("completion_tokens", int(len(content.split()) * 1.3))

            return content, input_tokens, output_tokens

    async def _stream_api(self, prompt: str) -> AsyncIterator[str]:
        async with self._client() as client:
            try:
                async with client.stream(
                    "POST",
                    f"{self.base_url}/chat/completions",
                    headers=self._headers(),
                    json=self._payload(prompt, stream=True),
                ) as response:
                    if response.is_error:
                        await response.aread()
                        raise _status_error(response, self._model)

                    # Server-sent events: "data: {...}" lines, ended by "data: [DONE]"
                    async for line in response.aiter_lines():
                        if not line.startswith("data:"):
                            continue
                        data = line[len("data:"):].strip()
                        if data == "[DONE]":
                            break
                        try:
                            event = json.loads(data)
                        except ValueError:
                            logger.warning("Skipping malformed Gemini stream event: %s", data[:200])
                            continue
                        for choice in event.get("choices") or []:
                            text = (choice.get("delta") or {}).get("content")
                            if text:
                                yield text
            except httpx.HTTPError as e:
                raise ProviderError(f"Gemini stream interrupted: {e}") from e
