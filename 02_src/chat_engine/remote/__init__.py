"""Remote AI service module."""

from .service import (
    AnthropicAssistantService,
    GuardedAssistantService,
    IAssistantService,
    PerformanceStats,
    RemoteReply,
    build_remote_context,
    parse_reply,
)

__all__ = [
    "AnthropicAssistantService",
    "GuardedAssistantService",
    "IAssistantService",
    "PerformanceStats",
    "RemoteReply",
    "build_remote_context",
    "parse_reply",
]
