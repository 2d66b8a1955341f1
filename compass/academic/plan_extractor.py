"""Turn raw model output into a structurally valid academic plan."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Tuple

from compass.services.shared.errors import PlanParseFailure

from .fallback_plan import clamp_grade_level, get_fallback_academic_plan
from .llm_json import find_object_span, strip_json_noise
from .plan_schema import missing_plan_fields, plan_value_issues

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "Used fallback data due to AI generation error"


@dataclass
class PlanExtraction:
    plan: Dict[str, Any]
    used_fallback: bool
    strategy: str = ""
    missing_fields: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _loads_object(text: str, strategy: str) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise PlanParseFailure(f"{strategy}: {exc}") from exc
    if not isinstance(data, dict):
        raise PlanParseFailure(f"{strategy}: top-level JSON is {type(data).__name__}, expected object")
    return data


def parse_direct(text: str) -> Dict[str, Any]:
    return _loads_object((text or "").strip(), "direct")


def parse_embedded(text: str) -> Dict[str, Any]:
    span = find_object_span(text)
    if not span:
        raise PlanParseFailure("embedded: no {...} span found")
    return _loads_object(span, "embedded")


def parse_cleaned(text: str) -> Dict[str, Any]:
    cleaned = strip_json_noise(text)
    try:
        return _loads_object(cleaned, "cleaned")
    except PlanParseFailure:
        span = find_object_span(cleaned)
        if not span:
            raise
        return _loads_object(span, "cleaned")


PARSE_STRATEGIES: Tuple[Tuple[str, Callable[[str], Dict[str, Any]]], ...] = (
    ("direct", parse_direct),
    ("embedded", parse_embedded),
    ("cleaned", parse_cleaned),
)


def parse_plan_json(text: str) -> Tuple[Dict[str, Any], str]:
    """Run the strategies in order; raise PlanParseFailure when all fail."""
    errors: List[str] = []
    for name, strategy in PARSE_STRATEGIES:
        try:
            return strategy(text), name
        except PlanParseFailure as exc:
            errors.append(str(exc))
    raise PlanParseFailure("; ".join(errors) or "empty response")


def fallback_extraction(grade: Any, reason: str, missing_fields: List[str] | None = None) -> PlanExtraction:
    return PlanExtraction(
        plan=get_fallback_academic_plan(clamp_grade_level(grade)),
        used_fallback=True,
        strategy="fallback",
        missing_fields=list(missing_fields or []),
        warnings=[FALLBACK_WARNING, reason],
    )


def extract_academic_plan(text: str, grade: Any) -> PlanExtraction:
    try:
        plan, strategy = parse_plan_json(text)
    except PlanParseFailure as exc:
        logger.warning("academic_plan_parse_failed len=%s err=%s", len(text or ""), exc)
        return fallback_extraction(grade, f"parse failed: {exc}")

    missing = missing_plan_fields(plan)
    if missing:
        logger.warning("academic_plan_invalid_structure strategy=%s missing=%s", strategy, ",".join(missing))
        return fallback_extraction(grade, f"missing fields: {', '.join(missing)}", missing)

    issues = plan_value_issues(plan)
    if issues:
        logger.info("academic_plan_value_issues strategy=%s count=%s", strategy, len(issues))
    return PlanExtraction(plan=plan, used_fallback=False, strategy=strategy, warnings=issues)
