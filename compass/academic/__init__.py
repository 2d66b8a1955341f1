"""Academic domain modules: GPA engine and academic plan extraction."""

from .gpa_calculator import (
    calculate_all_gpas,
    calculate_gpa,
    course_grade_points,
    format_gpa,
    get_letter_grade,
)
from .plan_extractor import PlanExtraction, extract_academic_plan
from .fallback_plan import get_fallback_academic_plan

__all__ = [
    "calculate_all_gpas",
    "calculate_gpa",
    "course_grade_points",
    "format_gpa",
    "get_letter_grade",
    "PlanExtraction",
    "extract_academic_plan",
    "get_fallback_academic_plan",
]
