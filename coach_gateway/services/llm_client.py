"""
Groq Completion Client

Groq exposes an OpenAI-compatible API, so we use the openai library
pointed at the Groq base URL.

CONTRACT:
- No credential -> ConfigurationError, raised before any network access
- Non-2xx or unreachable provider -> UpstreamError (provider message kept
  for the log, never for the caller)
- 2xx without choices[0].message.content -> InvalidResponseError
- Content is returned exactly as the provider sent it

Retries and timeouts come from CompletionConfig. With max_retries=0 every
call is a single attempt. Above that, 408/409/429/5xx and transport failures
are retried with exponential backoff and jitter, but only while the caller's
deadline still leaves room for another attempt. The SDK's own retries are
switched off so the deadline covers the whole call.
"""
import logging
import random
import time
from functools import lru_cache
from typing import List, Optional, Sequence

import httpx
from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    OpenAI,
)

from coach_gateway.core.config import CompletionConfig, get_settings
from coach_gateway.core.errors import (
    ConfigurationError,
    InvalidResponseError,
    UpstreamError,
)
from coach_gateway.schemas.schemas import (
    ChatMessage,
    CompletionOptions,
    ProviderStatus,
    ProviderTestResponse,
)

logger = logging.getLogger("coach_gateway.services.llm_client")

PING_PROMPT = "Reply with exactly one word: OK"

RETRY_BASE_DELAY = 0.5
RETRY_MAX_DELAY = 8.0
# Budget an attempt needs after a backoff sleep to be worth making
MIN_ATTEMPT_SECONDS = 0.1


def _upstream_message(exc: APIStatusError) -> str:
    """Provider's error.message if it sent one, else the HTTP reason phrase."""
    body = exc.body
    if isinstance(body, dict):
        if isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
        nested = body.get("error")
        if isinstance(nested, dict) and nested.get("message"):
            return str(nested["message"])
    return exc.response.reason_phrase or f"HTTP {exc.status_code}"


def _extract_content(completion) -> str:
    choices = getattr(completion, "choices", None)
    if not isinstance(choices, list) or not choices:
        raise InvalidResponseError("Invalid response format from provider: no choices")
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if not isinstance(content, str):
        raise InvalidResponseError("Invalid response format from provider: no message content")
    return content


def _is_retryable(error: UpstreamError) -> bool:
    status = error.upstream_status
    return status is None or status in (408, 409, 429) or status >= 500


def _backoff_delay(attempt: int) -> float:
    delay = min(RETRY_BASE_DELAY * (2 ** attempt), RETRY_MAX_DELAY)
    return delay * random.uniform(0.75, 1.0)


class CompletionClient:
    """
    Wrapper around the chat-completions endpoint.
    The SDK client is built up front when a key is present; without one,
    calls fail with ConfigurationError instead of at import.
    """

    def __init__(self, config: CompletionConfig, http_client: Optional[httpx.Client] = None):
        self.config = config
        self._client: Optional[OpenAI] = None
        if self.is_configured:
            self._client = OpenAI(
                api_key=config.api_key,
                base_url=config.base_url,
                timeout=config.timeout,
                max_retries=0,
                http_client=http_client,
            )

    @property
    def is_configured(self) -> bool:
        return bool(self.config.api_key)

    def _sdk(self) -> OpenAI:
        if self._client is None:
            raise ConfigurationError("GROQ_API_KEY is not configured")
        return self._client

    def complete(
        self,
        messages: Sequence[ChatMessage],
        options: Optional[CompletionOptions] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """
        Send the full conversation and return the first choice's content.
        `timeout` is the caller's remaining deadline in seconds; it bounds
        every attempt and backoff together.
        """
        client = self._sdk()
        options = options or CompletionOptions()
        model = options.model or self.config.model
        payload: List[dict] = [m.model_dump() for m in messages]
        budget = timeout if timeout is not None else self.config.timeout * (self.config.max_retries + 1)
        deadline = time.monotonic() + budget

        attempt = 0
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise UpstreamError("Request deadline exhausted before provider call")
            try:
                completion = self._create(client, model, payload, options, min(self.config.timeout, remaining))
                break
            except UpstreamError as e:
                if attempt >= self.config.max_retries or not _is_retryable(e):
                    raise
                delay = _backoff_delay(attempt)
                if delay + MIN_ATTEMPT_SECONDS >= deadline - time.monotonic():
                    logger.warning("Completion retry skipped, deadline too close | attempt=%s err=%s", attempt + 1, e.message)
                    raise
                logger.warning(
                    "Completion attempt failed, retrying | attempt=%s status=%s delay=%.2f err=%s",
                    attempt + 1, e.upstream_status, delay, e.message,
                )
                time.sleep(delay)
                attempt += 1

        content = _extract_content(completion)
        logger.debug(
            "Completion ok | model=%s messages=%s attempts=%s chars=%s",
            model, len(payload), attempt + 1, len(content),
        )
        return content

    def _create(self, client: OpenAI, model: str, payload: List[dict], options: CompletionOptions, timeout: float):
        try:
            return client.chat.completions.create(
                model=model,
                messages=payload,
                temperature=(
                    options.temperature
                    if options.temperature is not None
                    else self.config.temperature
                ),
                max_tokens=options.max_tokens or self.config.max_tokens,
                timeout=timeout,
            )
        except APIStatusError as e:
            raise UpstreamError(_upstream_message(e), upstream_status=e.status_code) from e
        except APIResponseValidationError as e:
            raise InvalidResponseError(f"Provider response failed validation: {e}") from e
        except APIConnectionError as e:
            # APITimeoutError is a subclass
            raise UpstreamError(f"Provider unreachable: {e}") from e
        except ValueError as e:
            # 2xx with a JSON content type but an undecodable body
            raise InvalidResponseError(f"Provider returned malformed JSON: {e}") from e

    def ping(self) -> ProviderTestResponse:
        """Cheap connectivity check, classifies the failure for the UI."""
        if not self.is_configured:
            return ProviderTestResponse(status=ProviderStatus.no_key, message="No key configured")

        start = time.monotonic()
        try:
            self.complete(
                [ChatMessage(role="user", content=PING_PROMPT)],
                CompletionOptions(max_tokens=10),
            )
            return ProviderTestResponse(status=ProviderStatus.ok, latency_ms=_elapsed_ms(start))
        except UpstreamError as e:
            latency_ms = _elapsed_ms(start)
            cause = e.__cause__
            if e.upstream_status == 429:
                retry_after = None
                if isinstance(cause, APIStatusError):
                    retry_after = cause.response.headers.get("retry-after")
                message = "Rate limited"
                if retry_after and retry_after.isdigit() and int(retry_after) > 0:
                    message = f"Try again in ~{-(-int(retry_after) // 60)} min"
                return ProviderTestResponse(
                    status=ProviderStatus.rate_limited, message=message, latency_ms=latency_ms
                )
            if e.upstream_status in (401, 403) or "api key" in e.message.lower():
                return ProviderTestResponse(
                    status=ProviderStatus.invalid_key, message="Invalid API key", latency_ms=latency_ms
                )
            prefix = f"HTTP {e.upstream_status}: " if e.upstream_status else ""
            return ProviderTestResponse(
                status=ProviderStatus.error, message=f"{prefix}{e.message}", latency_ms=latency_ms
            )
        except InvalidResponseError as e:
            return ProviderTestResponse(
                status=ProviderStatus.error, message=e.message, latency_ms=_elapsed_ms(start)
            )


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


@lru_cache()
def get_completion_client() -> CompletionClient:
    """Get or create the completion client (one per process)."""
    return CompletionClient(get_settings().completion_config())
