from typing import Iterable, Optional
from collections import OrderedDict
from datetime import datetime, timezone
import uuid

from ...domain.entities import ChatMessage, ChatSession
from ...domain.repositories import SessionRepository
from .demo_data import DEMO_SESSIONS

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemorySessionRepository(SessionRepository):
    """Chat sessions held in process memory; everything is lost on restart."""

    def __init__(self, seed: Optional[Iterable[ChatSession]] = None):
        self._storage: OrderedDict[str, ChatSession] = OrderedDict()
        for session in DEMO_SESSIONS if seed is None else seed:
            self._storage[session.session_id] = session.model_copy(deep=True)

    async def get_all(self) -> list[ChatSession]:
        # Most recently updated first; empty sessions sort last
        return sorted(
            self._storage.values(),
            key=lambda s: s.updated_at or _EPOCH,
            reverse=True,
        )

    async def get(self, session_id: str) -> Optional[ChatSession]:
        return self._storage.get(session_id)

    async def create(self) -> ChatSession:
        session = ChatSession(session_id=str(uuid.uuid4()))
        self._storage[session.session_id] = session
        return session

    async def append(self, session_id: str, message: ChatMessage) -> Optional[ChatSession]:
        session = self._storage.get(session_id)
        if session is None:
            return None
        session.append(message)
        return session

    async def delete(self, session_id: str) -> bool:
        if session_id in self._storage:
            del self._storage[session_id]
            return True
        return False
