"""
Chat Service - the interview-prep chat pipeline.

    job id -> application record -> system prompt -> conversation -> provider -> reply

Everything here is synchronous: the store lookup and the provider call are
the only blocking steps, and they share one request deadline.
"""
import logging
import time
from typing import Any, Optional, Sequence

from coach_gateway.core.config import Settings, get_settings
from coach_gateway.core.errors import UpstreamError, ValidationError
from coach_gateway.schemas.schemas import ChatMessage, ChatRole, CompletionOptions
from coach_gateway.services.application_repository import (
    ApplicationRepository,
    get_application_repository,
)
from coach_gateway.services.conversation import build_conversation
from coach_gateway.services.llm_client import CompletionClient, get_completion_client
from coach_gateway.services.prompt_builder import PromptTemplate, assemble_system_prompt
from coach_gateway.services.prompts import INTERVIEW_PREP_CHAT_PROMPT

logger = logging.getLogger("coach_gateway.services.chat_service")


class ChatService:

    def __init__(
        self,
        repository: ApplicationRepository,
        client: CompletionClient,
        deadline_seconds: float,
        template: PromptTemplate = INTERVIEW_PREP_CHAT_PROMPT,
        options: Optional[CompletionOptions] = None,
    ):
        self.repository = repository
        self.client = client
        self.deadline_seconds = deadline_seconds
        self.template = template
        self.options = options

    def reply(self, job_id: Optional[str], messages: Optional[Sequence[Any]]) -> ChatMessage:
        """
        Answer the latest turn of `messages` in the context of application `job_id`.
        Raises a GatewayError subclass on any failure.
        """
        if not job_id or messages is None:
            raise ValidationError("Missing jobId or messages")

        started = time.monotonic()
        record = self.repository.get_application(job_id)
        system_prompt = assemble_system_prompt(record, self.template)
        conversation = build_conversation(system_prompt, messages)

        remaining = self.deadline_seconds - (time.monotonic() - started)
        if remaining <= 0:
            raise UpstreamError("Request deadline exhausted before provider call")

        content = self.client.complete(conversation, self.options, timeout=remaining)
        logger.info(
            "Chat reply generated | job_id=%s turns=%s elapsed_ms=%.0f",
            job_id, len(conversation) - 1, (time.monotonic() - started) * 1000,
        )
        return ChatMessage(role=ChatRole.assistant, content=content)


def get_chat_service() -> ChatService:
    """FastAPI dependency."""
    settings: Settings = get_settings()
    return ChatService(
        repository=get_application_repository(),
        client=get_completion_client(),
        deadline_seconds=settings.request_deadline_seconds,
    )
