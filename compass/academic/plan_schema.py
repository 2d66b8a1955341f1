from __future__ import annotations

from typing import Any, Dict, List

YEAR_KEYS = ("freshman", "sophomore", "junior", "senior")

REQUIRED_PLAN_FIELDS = (
    "focusAreas",
    "careerAlignment",
    "fourYearPlan",
    "extracurricularRecommendations",
    "summerActivities",
    "postGraduationRecommendations",
)

COURSE_TYPES = ("required", "elective", "advanced")
PLAN_YEARS = (9, 10, 11, 12)
PLAN_SEMESTERS = ("Fall", "Spring", "Both")

MIN_CREDITS = 0.5
MAX_CREDITS = 5.0


def missing_plan_fields(plan: Any) -> List[str]:
    """
    Presence-only check. Lists may be empty; a null value counts as missing.
    Year buckets are reported as ``fourYearPlan.<year>``.
    """
    if not isinstance(plan, dict):
        return list(REQUIRED_PLAN_FIELDS)

    missing = [field for field in REQUIRED_PLAN_FIELDS if plan.get(field) is None]
    four_year = plan.get("fourYearPlan")
    if four_year is None:
        return missing
    if not isinstance(four_year, dict):
        return missing + [f"fourYearPlan.{key}" for key in YEAR_KEYS]
    missing.extend(f"fourYearPlan.{key}" for key in YEAR_KEYS if four_year.get(key) is None)
    return missing


def is_valid_plan(plan: Any) -> bool:
    return not missing_plan_fields(plan)


def course_recommendation_issues(course: Any, where: str = "course") -> List[str]:
    if not isinstance(course, dict):
        return [f"{where}: not an object"]
    issues: List[str] = []
    if not str(course.get("name") or "").strip():
        issues.append(f"{where}: missing name")
    if course.get("type") not in COURSE_TYPES:
        issues.append(f"{where}: type {course.get('type')!r} not in {COURSE_TYPES}")
    if course.get("year") not in PLAN_YEARS:
        issues.append(f"{where}: year {course.get('year')!r} not in {PLAN_YEARS}")
    if course.get("semester") not in PLAN_SEMESTERS:
        issues.append(f"{where}: semester {course.get('semester')!r} not in {PLAN_SEMESTERS}")
    credits = course.get("credits")
    if isinstance(credits, bool) or not isinstance(credits, (int, float)):
        issues.append(f"{where}: credits {credits!r} not numeric")
    elif not MIN_CREDITS <= float(credits) <= MAX_CREDITS:
        issues.append(f"{where}: credits {credits!r} outside {MIN_CREDITS}-{MAX_CREDITS}")
    return issues


def plan_value_issues(plan: Dict[str, Any]) -> List[str]:
    """Per-course value checks. Reported only; they never reject a plan."""
    four_year = plan.get("fourYearPlan") if isinstance(plan, dict) else None
    if not isinstance(four_year, dict):
        return []
    issues: List[str] = []
    for key in YEAR_KEYS:
        bucket = four_year.get(key)
        if not isinstance(bucket, list):
            issues.append(f"fourYearPlan.{key}: not a list")
            continue
        for idx, course in enumerate(bucket):
            issues.extend(course_recommendation_issues(course, where=f"{key}[{idx}]"))
    return issues
