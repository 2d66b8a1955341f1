from __future__ import annotations

import copy
import math
from typing import Any, Dict, Iterable, List, Optional

# 4.0 scale. P/I/W are recorded on the transcript but never averaged.
GRADE_POINTS: Dict[str, float] = {
    "A+": 4.0,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.3,
    "D": 1.0,
    "D-": 0.7,
    "F": 0.0,
}

NON_GPA_GRADES = ("P", "I", "W")
VALID_GRADES = tuple(GRADE_POINTS) + NON_GPA_GRADES

EXCLUDED: Optional[float] = None

COURSE_TYPE_BONUS: Dict[str, float] = {
    "regular": 0.0,
    "honors": 0.5,
    "ap": 1.0,
}

PERCENTAGE_BANDS = [
    (97, "A+"),
    (93, "A"),
    (90, "A-"),
    (87, "B+"),
    (83, "B"),
    (80, "B-"),
    (77, "C+"),
    (73, "C"),
    (70, "C-"),
    (67, "D+"),
    (63, "D"),
    (60, "D-"),
]


def grade_point(letter: Any) -> Optional[float]:
    """Base grade point for a letter, or EXCLUDED for P/I/W and unknown values."""
    key = str(letter or "").strip().upper()
    return GRADE_POINTS.get(key, EXCLUDED)


def _credits(course: Dict[str, Any]) -> float:
    try:
        credits = float(course.get("credits") or 0)
    except Exception:
        return 0.0
    return credits if math.isfinite(credits) else 0.0


def is_gpa_eligible(course: Dict[str, Any]) -> bool:
    if not isinstance(course, dict):
        return False
    if not course.get("completed"):
        return False
    return grade_point(course.get("grade")) is not EXCLUDED


def course_grade_points(course: Dict[str, Any]) -> float:
    if not isinstance(course, dict):
        return 0.0
    base = grade_point(course.get("grade"))
    if base is EXCLUDED:
        return 0.0
    course_type = str(course.get("course_type") or "regular").strip().lower()
    return base + COURSE_TYPE_BONUS.get(course_type, 0.0)


def eligible_courses(courses: Iterable[Dict[str, Any]] | None) -> List[Dict[str, Any]]:
    return [c for c in (courses or []) if is_gpa_eligible(c)]


def calculate_gpa(courses: Iterable[Dict[str, Any]] | None) -> float:
    total_points = 0.0
    total_credits = 0.0
    for course in eligible_courses(courses):
        credits = _credits(course)
        total_points += course_grade_points(course) * credits
        total_credits += credits
    if total_credits <= 0:
        return 0.0
    return round(total_points / total_credits, 2)


def calculate_all_gpas(semesters: Iterable[Dict[str, Any]] | None) -> Dict[str, Any]:
    """
    Recompute every semester GPA plus the cumulative figures.

    Cumulative GPA is credit-weighted over the union of eligible courses,
    not the mean of the semester GPAs. The input is left untouched; the
    returned semesters are deep copies with ``gpa`` filled in.
    """
    semesters_with_gpa: List[Dict[str, Any]] = copy.deepcopy(list(semesters or []))
    all_eligible: List[Dict[str, Any]] = []
    total_credits = 0.0

    for semester in semesters_with_gpa:
        if not isinstance(semester, dict):
            continue
        completed = eligible_courses(semester.get("courses"))
        semester["gpa"] = calculate_gpa(completed)
        all_eligible.extend(completed)
        total_credits += sum(_credits(c) for c in completed)

    return {
        "semesters": semesters_with_gpa,
        "cumulative_gpa": calculate_gpa(all_eligible),
        "total_credits": round(total_credits, 2),
    }


def format_gpa(gpa: Any) -> str:
    try:
        return f"{float(gpa):.2f}"
    except Exception:
        return "0.00"


def get_letter_grade(percentage: float) -> str:
    try:
        pct = float(percentage)
    except Exception:
        return "F"
    for threshold, letter in PERCENTAGE_BANDS:
        if pct >= threshold:
            return letter
    return "F"
