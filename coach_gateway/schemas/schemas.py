"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Any, Union
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class ChatRole(str, Enum):
    system = "system"
    user = "user"
    assistant = "assistant"


class ProviderStatus(str, Enum):
    ok = "ok"
    rate_limited = "rate_limited"
    invalid_key = "invalid_key"
    no_key = "no_key"
    error = "error"


# ============================================================
# APPLICATION RECORD (read-only, owned by the tracker database)
# ============================================================

class ApplicationRecord(BaseModel):
    """One row of the applications table, as far as the chat needs it."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Any = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    # Left untyped on purpose: JSON columns can hold anything
    required_skills: Any = None
    role_summary: Optional[str] = None
    formatted_content: Optional[str] = None
    original_content: Optional[str] = None

    @classmethod
    def from_row(cls, row: dict) -> "ApplicationRecord":
        return cls.model_validate(row)


class PromptContext(BaseModel):
    job_title: Optional[str] = None
    company: Optional[str] = None
    required_skills: List[Any] = Field(default_factory=list)
    role_summary: str


# ============================================================
# CHAT SCHEMAS
# ============================================================

class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    role: ChatRole
    content: str


class ChatRequest(BaseModel):
    """
    Inbound chat body. Fields are optional here so that a missing jobId or
    messages list produces the gateway's own 400 instead of a 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    job_id: Optional[str] = Field(None, alias="jobId")
    # Shape is checked by the conversation builder, after the record lookup
    messages: Optional[Any] = None

    @field_validator("job_id", mode="before")
    @classmethod
    def coerce_job_id(cls, v: Union[str, int, None]) -> Optional[str]:
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, int):
            return str(v)
        return v


class ChatReply(BaseModel):
    role: ChatRole = ChatRole.assistant
    content: str


class CompletionOptions(BaseModel):
    """Per-call overrides; anything left as None falls back to config."""

    model: Optional[str] = None
    temperature: Optional[float] = Field(None, ge=0, le=2)
    max_tokens: Optional[int] = Field(None, ge=1)


# ============================================================
# PROVIDER CHECK SCHEMAS
# ============================================================

class ProviderTestResponse(BaseModel):
    status: ProviderStatus
    message: Optional[str] = None
    latency_ms: Optional[int] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class ErrorResponse(BaseModel):
    detail: str
