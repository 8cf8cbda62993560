from .langfuse_client import (
    get_langfuse,
    observe_llm_call,
    create_trace,
    end_trace,
    flush_langfuse,
)

__all__ = [
    "get_langfuse",
    "observe_llm_call",
    "create_trace",
    "end_trace",
    "flush_langfuse",
]
