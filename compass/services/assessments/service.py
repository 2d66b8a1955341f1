from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List

from django.contrib.auth.models import User
from django.utils import timezone

from compass.academic.analysis_extractor import build_analysis, fallback_analysis
from compass.academic.assessments import (
    ASSESSMENT_TYPES,
    courses_for_category,
    get_questionnaire,
    is_assessment_type,
)
from compass.academic.llm_json import extract_json_array
from compass.ai_engine import prompts
from compass.ai_engine.llm_client import LLMResult, invoke_with_provider_fallback
from compass.models import Assessment
from compass.services.shared.errors import ExternalDependencyError, NotFoundError, ValidationError
from compass.services.shared.profiles import get_or_create_profile

logger = logging.getLogger(__name__)

InvokeFn = Callable[..., LLMResult]


def _require_type(assessment_type: Any) -> str:
    if not is_assessment_type(assessment_type):
        raise ValidationError("Valid assessment type is required.")
    return str(assessment_type)


def get_questions(assessment_type: Any) -> Dict[str, Any]:
    return get_questionnaire(_require_type(assessment_type))


def latest_valid_assessments(user: User) -> Dict[str, Assessment]:
    """Most recent valid assessment per type; missing types are absent."""
    out: Dict[str, Assessment] = {}
    for assessment in Assessment.objects.filter(user=user, valid=True).order_by("-completed_at", "-id"):
        out.setdefault(assessment.type, assessment)
    return out


def assessment_context(assessment: Assessment) -> Dict[str, Any]:
    return {
        "type": assessment.type,
        "responses": list(assessment.responses or []),
        "results": list(assessment.results or []),
        "completed_at": assessment.completed_at.strftime("%Y-%m-%d"),
    }


def _normalize_responses(responses: Any) -> List[Dict[str, Any]]:
    if not isinstance(responses, list) or not responses:
        raise ValidationError("Assessment responses are required.")
    out: List[Dict[str, Any]] = []
    for idx, r in enumerate(responses, start=1):
        if not isinstance(r, dict):
            raise ValidationError(f"Response {idx} must be an object.")
        question_id = str(r.get("question_id") or r.get("questionId") or "").strip()
        if not question_id or r.get("response") is None:
            raise ValidationError(f"Response {idx} needs a question id and a response.")
        out.append(
            {
                "question_id": question_id,
                "question_text": str(r.get("question_text") or r.get("questionText") or ""),
                "response": r.get("response"),
            }
        )
    return out


def _confidence(value: Any) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    return min(max(score, 0.0), 1.0)


def _normalize_recommendations(items: List[Any]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        field = str(item.get("fieldOfStudy") or "").strip()
        if not field:
            continue
        out.append(
            {
                "field_of_study": field,
                "description": str(item.get("description") or "").strip(),
                "career_paths": list(item.get("careerPaths") or []),
                "courses_recommended": list(item.get("coursesRecommended") or []),
                "strengths_highlighted": list(item.get("strengthsHighlighted") or []),
                "areas_for_growth": list(item.get("areasForGrowth") or []),
                "confidence_score": _confidence(item.get("confidenceScore")),
            }
        )
    return out


def submit_assessment(
    user: User,
    assessment_type: Any,
    responses: Any,
    request_id: str = "-",
    *,
    invoke_fn: InvokeFn | None = None,
) -> Dict[str, Any]:
    kind = _require_type(assessment_type)
    normalized = _normalize_responses(responses)

    invoke = invoke_fn or invoke_with_provider_fallback
    result = invoke(
        prompt=prompts.build_recommendation_prompt(kind, normalized),
        system=prompts.RECOMMENDATION_SYSTEM,
        temperature=0.2,
        max_tokens=2500,
    )
    if not result.ok:
        logger.warning("assessment_recommendation_failed request_id=%s type=%s err=%s", request_id, kind, result.error)
        raise ExternalDependencyError(f"Recommendation service unavailable: {result.error}")

    parsed = extract_json_array(result.text)
    if parsed is None:
        logger.warning("assessment_recommendation_unparseable request_id=%s provider=%s", request_id, result.provider)
        raise ExternalDependencyError("Invalid response format from recommendation service")
    recommendations = _normalize_recommendations(parsed)

    assessment = Assessment.objects.create(
        user=user,
        type=kind,
        responses=[{"question_id": r["question_id"], "response": r["response"]} for r in normalized],
        results=[
            {
                "category": rec["field_of_study"],
                "score": round(rec["confidence_score"] * 100, 2),
                "description": rec["description"],
            }
            for rec in recommendations
        ],
        valid=True,
    )
    logger.info(
        "assessment_submitted request_id=%s user=%s type=%s results=%s provider=%s",
        request_id,
        user.id,
        kind,
        len(recommendations),
        result.provider,
    )
    return {
        "message": "Assessment submitted successfully",
        "assessment_id": assessment.id,
        "summary": {
            "type": kind,
            "completed_at": assessment.completed_at.isoformat(),
            "top_results": recommendations[:3],
        },
    }


def get_assessment_status(user: User) -> Dict[str, Any]:
    completed = set(Assessment.objects.filter(user=user, valid=True).values_list("type", flat=True))
    statuses = {t: ("completed" if t in completed else "not_started") for t in ASSESSMENT_TYPES}
    return {"success": True, "statuses": statuses}


def get_assessment_results(user: User, assessment_type: Any) -> Dict[str, Any]:
    kind = _require_type(assessment_type)
    assessment = latest_valid_assessments(user).get(kind)
    if assessment is None:
        raise NotFoundError("No completed assessment found for this type.")

    results = sorted(
        (
            {
                "category": r.get("category", ""),
                "score": float(r.get("score") or 0),
                "description": r.get("description", ""),
            }
            for r in assessment.results or []
            if isinstance(r, dict)
        ),
        key=lambda r: r["score"],
        reverse=True,
    )
    recommendations = [
        {"field": r["category"], "description": r["description"], "courses": courses_for_category(r["category"])}
        for r in results[:3]
    ]
    return {
        "assessment_id": assessment.id,
        "type": assessment.type,
        "completed_at": assessment.completed_at.isoformat(),
        "results": results,
        "recommendations": recommendations,
        "overview": {
            "top_category": results[0]["category"] if results else "Unknown",
            "assessment_date": assessment.completed_at.isoformat(),
            "total_questions": len(assessment.responses or []),
        },
    }


def get_comprehensive_results(
    user: User,
    request_id: str = "-",
    *,
    invoke_fn: InvokeFn | None = None,
) -> Dict[str, Any]:
    by_type = latest_valid_assessments(user)
    completed_types = [t for t in ASSESSMENT_TYPES if t in by_type]
    if len(completed_types) < len(ASSESSMENT_TYPES):
        return {
            "completed": False,
            "message": "Not all required assessments are completed",
            "completed_assessments": completed_types,
            "required_assessments": list(ASSESSMENT_TYPES),
        }

    invoke = invoke_fn or invoke_with_provider_fallback
    result = invoke(
        prompt=prompts.build_analysis_prompt([assessment_context(by_type[t]) for t in ASSESSMENT_TYPES]),
        system=prompts.ANALYSIS_SYSTEM,
        temperature=0.2,
        max_tokens=3000,
    )
    if result.ok:
        analysis = build_analysis(result.text)
    else:
        logger.warning("comprehensive_analysis_failed request_id=%s err=%s", request_id, result.error)
        analysis = fallback_analysis()

    return {
        "completed": True,
        "username": get_or_create_profile(user).display_name(),
        "completed_assessments": completed_types,
        "analysis_date": timezone.now().isoformat(),
        "analysis": analysis,
        "fallback_used": not result.ok,
    }


def get_dashboard_recommendations(user: User, limit: int = 5) -> Dict[str, Any]:
    assessments = list(Assessment.objects.filter(user=user, valid=True))
    if not assessments:
        return {
            "recommended_fields": [],
            "total_assessments": len(ASSESSMENT_TYPES),
            "completed_assessments": 0,
        }

    totals: Dict[str, List[float]] = {}
    for assessment in assessments:
        for r in assessment.results or []:
            if not isinstance(r, dict) or not r.get("category"):
                continue
            bucket = totals.setdefault(r["category"], [0.0, 0])
            bucket[0] += float(r.get("score") or 0)
            bucket[1] += 1

    ranked = sorted(totals.items(), key=lambda kv: kv[1][0] / kv[1][1], reverse=True)
    return {
        "recommended_fields": [category for category, _ in ranked[:limit]],
        "total_assessments": len(ASSESSMENT_TYPES),
        "completed_assessments": len({a.type for a in assessments}),
    }
