from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from django.contrib.auth.models import User

from compass.academic.assessments import ASSESSMENT_TYPES
from compass.ai_engine import prompts
from compass.ai_engine.llm_client import LLMResult, invoke_with_provider_fallback
from compass.models import AdvisorChatHistory
from compass.services.assessments.service import assessment_context, latest_valid_assessments
from compass.services.shared.errors import ValidationError
from compass.services.shared.profiles import get_or_create_profile

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

InvokeFn = Callable[..., LLMResult]

ADVISOR_APOLOGY = (
    "I'm sorry, I'm having trouble processing your request right now. Please try again in a moment."
)


def build_advisor_system_prompt(user: User, has_completed_assessments: bool) -> str:
    profile = get_or_create_profile(user)
    assessments = None
    if has_completed_assessments:
        by_type = latest_valid_assessments(user)
        assessments = [assessment_context(by_type[t]) for t in ASSESSMENT_TYPES if t in by_type] or None
    return prompts.build_advisor_system_prompt(
        name=profile.display_name(),
        grade=int(profile.grade),
        role=profile.role,
        assessments=assessments,
    )


def chat_with_advisor(
    user: User,
    message: Any,
    has_completed_assessments: bool = False,
    request_id: str = "-",
    *,
    invoke_fn: InvokeFn | None = None,
) -> Dict[str, Any]:
    text = str(message or "").strip()
    if not text:
        raise ValidationError("Message is required.")

    invoke = invoke_fn or invoke_with_provider_fallback
    result = invoke(
        prompt=text,
        system=build_advisor_system_prompt(user, bool(has_completed_assessments)),
        temperature=0.7,
        max_tokens=1000,
    )
    if result.ok:
        answer = result.text
    else:
        logger.warning("advisor_chat_failed request_id=%s err=%s", request_id, result.error)
        answer = ADVISOR_APOLOGY

    AdvisorChatHistory.objects.create(
        user=user,
        channel=AdvisorChatHistory.CHANNEL_ADVISOR,
        question=text,
        answer=answer,
        fallback_used=not result.ok,
    )
    audit_logger.info(
        "advisor_chat request_id=%s user=%s provider=%s fallback=%s",
        request_id,
        user.id,
        result.provider or "-",
        result.fallback_used or not result.ok,
    )
    return {"message": answer}
