from .base import BaseLLMProvider, ProviderError
from .gemini_provider import GeminiProvider

__all__ = [
    "BaseLLMProvider",
    "ProviderError",
    "GeminiProvider",
]
