"""
Prompt Builder - turns an application record into the chat system prompt.

Missing data never fails the build:
- required_skills that are not a list become []
- the role summary falls back role_summary -> formatted_content ->
  original_content -> "No description available."
"""

from typing import Callable

from coach_gateway.schemas.schemas import ApplicationRecord, PromptContext
from coach_gateway.services.prompts import INTERVIEW_PREP_CHAT_PROMPT

NO_DESCRIPTION = "No description available."

PromptTemplate = Callable[[PromptContext], str]


def build_prompt_context(record: ApplicationRecord) -> PromptContext:
    skills = record.required_skills if isinstance(record.required_skills, list) else []
    summary = (
        record.role_summary
        or record.formatted_content
        or record.original_content
        or NO_DESCRIPTION
    )
    return PromptContext(
        job_title=record.job_title,
        company=record.company,
        required_skills=list(skills),
        role_summary=summary,
    )


def render_system_prompt(
    context: PromptContext, template: PromptTemplate = INTERVIEW_PREP_CHAT_PROMPT
) -> str:
    return template(context)


def assemble_system_prompt(
    record: ApplicationRecord, template: PromptTemplate = INTERVIEW_PREP_CHAT_PROMPT
) -> str:
    """Context + template in one step, as used by the chat service."""
    return render_system_prompt(build_prompt_context(record), template)
