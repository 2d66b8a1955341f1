from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from django.contrib.auth.models import User

from compass.academic.assessments import ASSESSMENT_TYPES
from compass.academic.fallback_plan import clamp_grade_level
from compass.academic.plan_extractor import extract_academic_plan, fallback_extraction
from compass.ai_engine import prompts
from compass.ai_engine.llm_client import LLMResult, invoke_with_provider_fallback
from compass.models import AcademicPlan, AdvisorChatHistory
from compass.services.assessments.service import assessment_context, latest_valid_assessments
from compass.services.shared.dto import PlanGenerationResult
from compass.services.shared.errors import NotFoundError, ValidationError
from compass.services.shared.profiles import build_user_summary, get_or_create_profile

logger = logging.getLogger(__name__)

InvokeFn = Callable[..., LLMResult]

PLAN_CHAT_APOLOGY = (
    "I'm sorry, I encountered an error while processing your question about your academic plan. "
    "Please try again later."
)


def generate_academic_plan(
    user: User,
    request_id: str = "-",
    *,
    invoke_fn: InvokeFn | None = None,
) -> PlanGenerationResult:
    by_type = latest_valid_assessments(user)
    if any(t not in by_type for t in ASSESSMENT_TYPES):
        raise ValidationError("All assessments must be completed before generating an academic plan")

    grade = clamp_grade_level(get_or_create_profile(user).grade)
    prompt = prompts.build_academic_plan_prompt([assessment_context(by_type[t]) for t in ASSESSMENT_TYPES], grade)

    invoke = invoke_fn or invoke_with_provider_fallback
    result = invoke(
        prompt=prompt,
        system=prompts.ACADEMIC_PLAN_SYSTEM,
        temperature=0.7,
        max_tokens=8000,
    )
    if result.ok:
        extraction = extract_academic_plan(result.text, grade)
    else:
        logger.warning("academic_plan_provider_failed request_id=%s err=%s", request_id, result.error)
        extraction = fallback_extraction(grade, f"provider failed: {result.error}")

    AcademicPlan.objects.update_or_create(
        user=user,
        defaults={
            "plan": extraction.plan,
            "used_fallback": extraction.used_fallback,
            "parse_strategy": extraction.strategy,
            "provider": result.provider if result.ok else "",
            "model_name": result.model if result.ok else "",
            "warnings": extraction.warnings,
        },
    )
    logger.info(
        "academic_plan_generated request_id=%s user=%s fallback=%s strategy=%s",
        request_id,
        user.id,
        extraction.used_fallback,
        extraction.strategy,
    )

    if extraction.used_fallback:
        return PlanGenerationResult(
            success=True,
            message="Academic plan generated using fallback data",
            used_fallback=True,
            strategy=extraction.strategy,
            warning=extraction.warnings[0],
        )
    return PlanGenerationResult(
        success=True,
        message="Academic plan generated successfully",
        used_fallback=False,
        strategy=extraction.strategy,
        provider=result.provider,
        model=result.model,
        value_issues=list(extraction.warnings),
    )


def get_academic_plan(user: User) -> Dict[str, Any]:
    stored = AcademicPlan.objects.filter(user=user).first()
    by_type = latest_valid_assessments(user)
    return {
        "academic_plan": stored.plan if stored else None,
        "used_fallback": bool(stored and stored.used_fallback),
        "all_assessments_completed": all(t in by_type for t in ASSESSMENT_TYPES),
        "user": build_user_summary(user),
    }


def chat_about_plan(
    user: User,
    message: Any,
    request_id: str = "-",
    *,
    invoke_fn: InvokeFn | None = None,
) -> Dict[str, Any]:
    text = str(message or "").strip()
    if not text:
        raise ValidationError("Message is required.")
    stored = AcademicPlan.objects.filter(user=user).first()
    if stored is None:
        raise NotFoundError("No academic plan found. Please generate a plan first.")

    invoke = invoke_fn or invoke_with_provider_fallback
    result = invoke(
        prompt=prompts.build_plan_chat_prompt(stored.plan, text),
        system=prompts.PLAN_CHAT_SYSTEM,
        temperature=0.7,
        max_tokens=1500,
    )
    if result.ok:
        answer = result.text
    else:
        logger.warning("academic_plan_chat_failed request_id=%s err=%s", request_id, result.error)
        answer = PLAN_CHAT_APOLOGY

    AdvisorChatHistory.objects.create(
        user=user,
        channel=AdvisorChatHistory.CHANNEL_PLAN,
        question=text,
        answer=answer,
        fallback_used=not result.ok,
    )
    return {"message": answer}
