"""
Conversation Builder - system prompt first, then the caller's turns in order.

Caller entries are validated here so a malformed turn is rejected with a
400 instead of being forwarded to the provider.
"""

from typing import Any, List, Sequence

from pydantic import ValidationError as PydanticValidationError

from coach_gateway.core.errors import ValidationError
from coach_gateway.schemas.schemas import ChatMessage, ChatRole


def parse_message(entry: Any, index: int) -> ChatMessage:
    if isinstance(entry, ChatMessage):
        message = entry
    elif isinstance(entry, dict):
        try:
            message = ChatMessage.model_validate(entry)
        except PydanticValidationError as e:
            fields = ", ".join(
                ".".join(str(p) for p in err["loc"]) or "message" for err in e.errors()
            )
            raise ValidationError(f"Invalid message at index {index}: {fields}") from e
    else:
        raise ValidationError(f"Invalid message at index {index}: expected an object")

    if message.role == ChatRole.system:
        raise ValidationError(f"Invalid message at index {index}: system role is reserved")
    return message


def build_conversation(system_prompt: str, messages: Sequence[Any]) -> List[ChatMessage]:
    if not isinstance(messages, (list, tuple)):
        raise ValidationError("messages must be a list")
    if not messages:
        raise ValidationError("messages must contain at least one entry")

    conversation = [ChatMessage(role=ChatRole.system, content=system_prompt)]
    conversation.extend(parse_message(entry, i) for i, entry in enumerate(messages))
    return conversation
