"""Schema layer for course tracker edits."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Set, Tuple

from compass.academic.gpa_calculator import COURSE_TYPE_BONUS, VALID_GRADES
from compass.services.shared.errors import ValidationError

TERMS = ("fall", "spring")
MIN_CREDITS = 0.5
MAX_CREDITS = 5.0
DEFAULT_CREDITS = 1.0


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_int(value: Any, label: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{label} must be a whole number.")
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValidationError(f"{label} must be a whole number.") from None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value if value is not None else "").strip().lower() in {"1", "true", "yes", "on"}


def clamp_credits(value: Any) -> float:
    try:
        credits = float(value)
    except (TypeError, ValueError):
        credits = DEFAULT_CREDITS
    if not math.isfinite(credits):
        credits = DEFAULT_CREDITS
    return min(max(credits, MIN_CREDITS), MAX_CREDITS)


def normalize_term(value: Any, label: str) -> str:
    term = str(value or "").strip().lower()
    if term not in TERMS:
        raise ValidationError(f"{label} must be one of: {', '.join(TERMS)}.")
    return term


def normalize_grade(value: Any, label: str) -> str | None:
    grade = str(value or "").strip().upper()
    if not grade:
        return None
    if grade not in VALID_GRADES:
        raise ValidationError(f"{label} grade '{value}' is not a recognised grade.")
    return grade


def normalize_course(raw: Any, *, term: str, year: int, label: str) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValidationError(f"{label} must be an object.")
    name = str(raw.get("name") or "").strip()
    if not name:
        raise ValidationError(f"{label}: course name is required.")

    course_type = str(_pick(raw, "course_type", "courseType", default="regular")).strip().lower()
    if course_type not in COURSE_TYPE_BONUS:
        raise ValidationError(f"{label}: course type must be one of: {', '.join(COURSE_TYPE_BONUS)}.")

    return {
        "name": name,
        "course_type": course_type,
        "credits": clamp_credits(_pick(raw, "credits", default=DEFAULT_CREDITS)),
        "term": normalize_term(_pick(raw, "term", "semester", default=term), f"{label} term"),
        "year": _as_int(_pick(raw, "year", default=year), f"{label} year"),
        "grade": normalize_grade(raw.get("grade"), label),
        "completed": _as_bool(raw.get("completed", False)),
    }


def normalize_semesters(payload: Any) -> List[Dict[str, Any]]:
    if not isinstance(payload, list):
        raise ValidationError("Semesters data is required and must be an array.")

    seen: Set[Tuple[str, int]] = set()
    out: List[Dict[str, Any]] = []
    for idx, raw in enumerate(payload, start=1):
        label = f"Semester {idx}"
        if not isinstance(raw, dict):
            raise ValidationError(f"{label} must be an object.")
        term = normalize_term(raw.get("term"), f"{label} term")
        year = _as_int(raw.get("year"), f"{label} year")
        if (term, year) in seen:
            raise ValidationError(f"Duplicate semester: {term} {year}.")
        seen.add((term, year))

        courses_raw = raw.get("courses") or []
        if not isinstance(courses_raw, list):
            raise ValidationError(f"{label} courses must be an array.")
        courses = [
            normalize_course(c, term=term, year=year, label=f"{label} course {cidx}")
            for cidx, c in enumerate(courses_raw, start=1)
        ]
        out.append({"term": term, "year": year, "courses": courses, "gpa": 0.0})
    return out
