from .chat_service import ChatService, fallback_message
from .prompt_builder import NOVA_SYSTEM_PROMPT, build_prompt, truncate_history

__all__ = [
    "ChatService",
    "fallback_message",
    "NOVA_SYSTEM_PROMPT",
    "build_prompt",
    "truncate_history",
]
