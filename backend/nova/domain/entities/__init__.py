from .chat import (
    ChatMessage,
    ChatSession,
    ChatRequest,
    ChatReply,
    ChatErrorReply,
    SessionSummary,
)
from .generation import LLMResponse, MetricResult

__all__ = [
    "ChatMessage",
    "ChatSession",
    "ChatRequest",
    "ChatReply",
    "ChatErrorReply",
    "SessionSummary",
    "LLMResponse",
    "MetricResult",
]
