from __future__ import annotations

import copy
from typing import Any, Dict, List

from .plan_schema import YEAR_KEYS


def _course(name: str, description: str, course_type: str, year: int, semester: str, credits: float, prerequisites: List[str] | None = None) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "type": course_type,
        "year": year,
        "semester": semester,
        "credits": credits,
        "prerequisites": list(prerequisites or []),
    }


DEFAULT_COURSES_BY_YEAR: Dict[int, List[Dict[str, Any]]] = {
    9: [
        _course("English 9", "Foundational English course covering literature, writing, and communication skills", "required", 9, "Fall", 1),
        _course("Algebra I or Geometry", "Core mathematics course focusing on algebraic concepts or geometric principles", "required", 9, "Both", 1),
        _course("Biology", "Introduction to biological concepts and scientific methods", "required", 9, "Both", 1),
        _course("World History", "Survey of major historical developments across global civilizations", "required", 9, "Both", 1),
        _course("Physical Education", "Development of physical fitness, health, and team sports skills", "required", 9, "Both", 0.5),
        _course("Foreign Language I", "Introduction to a foreign language and its associated cultures", "elective", 9, "Both", 1),
    ],
    10: [
        _course("English 10", "Continued development of literary analysis and composition skills", "required", 10, "Fall", 1, ["English 9"]),
        _course("Geometry or Algebra II", "Advanced mathematical concepts building on previous coursework", "required", 10, "Both", 1, ["Algebra I"]),
        _course("Chemistry", "Study of matter, its properties, and the interactions between substances", "required", 10, "Both", 1, ["Biology"]),
        _course("U.S. History", "Comprehensive study of American history and its impact on modern society", "required", 10, "Both", 1),
        _course("Foreign Language II", "Continued study of foreign language with emphasis on conversation and composition", "elective", 10, "Both", 1, ["Foreign Language I"]),
        _course("Fine Arts Elective", "Introduction to artistic expression through various media", "elective", 10, "Both", 0.5),
    ],
    11: [
        _course("English 11/American Literature", "Study of American literature and advanced composition techniques", "required", 11, "Fall", 1, ["English 10"]),
        _course("Algebra II or Pre-Calculus", "Advanced algebra concepts or preparation for calculus", "required", 11, "Both", 1, ["Geometry"]),
        _course("Physics", "Study of matter, energy, and the fundamental forces of nature", "required", 11, "Both", 1, ["Chemistry"]),
        _course("Government/Civics", "Examination of government structures, civic responsibilities, and political systems", "required", 11, "Fall", 0.5),
        _course("Economics", "Introduction to economic principles and financial literacy", "required", 11, "Spring", 0.5),
        _course("Foreign Language III", "Advanced language study focusing on literature and cultural contexts", "advanced", 11, "Both", 1, ["Foreign Language II"]),
        _course("Career Pathway Elective", "Specialized course aligned with the student's career interests", "elective", 11, "Both", 1),
    ],
    12: [
        _course("English 12/British Literature", "Study of British literature and college-level writing skills", "required", 12, "Fall", 1, ["English 11"]),
        _course("Pre-Calculus or Calculus", "Advanced mathematics preparation for college-level work", "advanced", 12, "Both", 1, ["Algebra II"]),
        _course("Advanced Science Elective", "Specialized science course in an area of interest", "advanced", 12, "Both", 1, ["Physics"]),
        _course("Social Studies Elective", "Specialized social studies course based on student interests", "elective", 12, "Both", 1),
        _course("College Preparation Seminar", "Guidance on college applications, essays, and transition planning", "required", 12, "Fall", 0.5),
        _course("Senior Capstone Project", "Independent research or project demonstrating culmination of high school learning", "required", 12, "Spring", 0.5),
        _course("Career Pathway Advanced Elective", "Advanced course aligned with post-graduation plans", "advanced", 12, "Both", 1),
    ],
}

FALLBACK_FOCUS_AREAS = [
    "Mathematics and Quantitative Skills",
    "Communication and Writing",
    "Critical Thinking and Problem Solving",
    "Technology and Digital Literacy",
    "Interpersonal Skills and Collaboration",
]

FALLBACK_CAREER_ALIGNMENT = [
    "Computer Science/Software Development",
    "Business Administration/Management",
    "Engineering",
    "Healthcare/Medicine",
    "Education/Teaching",
]

FALLBACK_EXTRACURRICULARS = [
    "Student Government or Leadership Club",
    "Academic Competition Team (Debate, Math, Science Olympiad)",
    "Community Service Organization",
    "Sports Team or Athletic Club",
    "Arts Program (Music, Theater, Visual Arts)",
    "Career-Oriented Club (Business, Engineering, Health)",
]

FALLBACK_POST_GRADUATION = [
    "Apply to 4-year colleges with strong programs in areas of interest",
    "Consider gap year opportunities for skill development",
    "Explore internship possibilities in chosen career fields",
    "Research scholarship opportunities based on academic achievements",
    "Develop a backup plan including community college pathway options",
]


def clamp_grade_level(grade: Any) -> int:
    try:
        value = int(grade)
    except Exception:
        value = 9
    return min(max(value, 9), 12)


def year_label_for_grade(grade: Any) -> str:
    return YEAR_KEYS[clamp_grade_level(grade) - 9]


def get_default_courses_for_year(year: int) -> List[Dict[str, Any]]:
    return copy.deepcopy(DEFAULT_COURSES_BY_YEAR.get(year, []))


def get_fallback_academic_plan(grade: Any) -> Dict[str, Any]:
    current_label = year_label_for_grade(grade)
    return {
        "focusAreas": list(FALLBACK_FOCUS_AREAS),
        "careerAlignment": list(FALLBACK_CAREER_ALIGNMENT),
        "fourYearPlan": {key: get_default_courses_for_year(9 + idx) for idx, key in enumerate(YEAR_KEYS)},
        "extracurricularRecommendations": list(FALLBACK_EXTRACURRICULARS),
        "summerActivities": [
            f"Summer courses at local community college (focus on {current_label} preparation)",
            "Volunteer work in areas aligned with career interests",
            "Summer internship or job shadowing",
            "Academic enrichment program or camp",
            "Self-directed project or portfolio development",
        ],
        "postGraduationRecommendations": list(FALLBACK_POST_GRADUATION),
    }
