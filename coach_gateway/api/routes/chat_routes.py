"""
Chat Routes

POST /ai/chat - Interview-prep chat grounded in one tracked application
POST /ai/test - Check that the completion provider answers
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from coach_gateway.core.errors import GatewayError
from coach_gateway.schemas.schemas import (
    ChatReply, ChatRequest, ErrorResponse, ProviderTestResponse
)
from coach_gateway.services.chat_service import ChatService, get_chat_service
from coach_gateway.services.llm_client import CompletionClient, get_completion_client

logger = logging.getLogger("coach_gateway.api.routes.chat_routes")

router = APIRouter(prefix="/ai", tags=["AI"])

GENERIC_FAILURE = "Failed to generate response"


@router.post(
    "/chat",
    response_model=ChatReply,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def chat(body: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """
    Relay one conversation turn to the provider.

    - 400: jobId or messages missing, or a malformed message
    - 404: jobId does not resolve
    - 500: anything else (detail is logged, never returned)
    """
    try:
        message = service.reply(body.job_id, body.messages)
    except GatewayError as e:
        if e.status_code >= 500:
            logger.error(
                "Chat API error | job_id=%s type=%s detail=%s",
                body.job_id, type(e).__name__, e.message,
            )
        else:
            logger.info(
                "Chat API rejected | job_id=%s status=%s detail=%s",
                body.job_id, e.status_code, e.message,
            )
        raise HTTPException(status_code=e.status_code, detail=e.public_message)
    except Exception:
        logger.exception("Chat API unexpected failure | job_id=%s", body.job_id)
        raise HTTPException(status_code=500, detail=GENERIC_FAILURE)

    return ChatReply(content=message.content)


@router.post("/test", response_model=ProviderTestResponse)
def check_provider(client: CompletionClient = Depends(get_completion_client)):
    """Send a one-word prompt and classify the outcome (ok, rate_limited, invalid_key...)."""
    result = client.ping()
    if result.status != "ok":
        logger.warning("Provider check failed | status=%s message=%s", result.status.value, result.message)
    return result
