from abc import ABC, abstractmethod
from typing import AsyncIterator, Optional, Protocol, Any
from ..entities import ChatMessage, ChatSession, LLMResponse


class LLMProviderInterface(Protocol):
    """Interface for LLM providers"""

    @property
    def provider_id(self) -> str:
        ...

    @property
    def model(self) -> str:
        ...

    async def is_available(self) -> bool:
        ...

    async def generate(self, prompt: str, trace: Optional[Any] = None) -> LLMResponse:
        ...

    def stream(self, prompt: str, trace: Optional[Any] = None) -> AsyncIterator[str]:
        ...


class SessionRepository(ABC):
    """Interface for chat session storage"""

    @abstractmethod
    async def get_all(self) -> list[ChatSession]:
        pass

    @abstractmethod
    async def get(self, session_id: str) -> ChatSession | None:
        pass

    @abstractmethod
    async def create(self) -> ChatSession:
        pass

    @abstractmethod
    async def append(self, session_id: str, message: ChatMessage) -> ChatSession | None:
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        pass
