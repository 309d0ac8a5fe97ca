"""
Schemas module - Request/Response schemas and the read-only record shape.
"""

from coach_gateway.schemas.schemas import (
    ApplicationRecord,
    ChatMessage,
    ChatReply,
    ChatRequest,
    ChatRole,
    CompletionOptions,
    PromptContext,
)

__all__ = [
    "ApplicationRecord",
    "ChatMessage",
    "ChatReply",
    "ChatRequest",
    "ChatRole",
    "CompletionOptions",
    "PromptContext",
]
