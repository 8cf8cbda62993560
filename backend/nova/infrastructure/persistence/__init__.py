from .memory_repository import InMemorySessionRepository
from .demo_data import DEMO_SESSIONS, get_demo_session

__all__ = [
    "InMemorySessionRepository",
    "DEMO_SESSIONS",
    "get_demo_session",
]
