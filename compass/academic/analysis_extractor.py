from __future__ import annotations

import copy
import re
from typing import Any, Dict, List

DEFAULT_CAREER_PATHS: List[Dict[str, Any]] = [
    {
        "title": "Technology Professional",
        "description": "Careers in software development, IT management, or data analysis.",
        "education_requirements": ["Bachelor's degree in Computer Science", "Technology certifications"],
        "major_recommendations": ["Computer Science", "Information Technology", "Data Science"],
    },
    {
        "title": "Business Analyst",
        "description": "Careers analyzing business needs and developing solutions.",
        "education_requirements": ["Bachelor's in Business or related field", "MBA advantageous"],
        "major_recommendations": ["Business Administration", "Economics", "Statistics"],
    },
]

DEFAULT_STRENGTHS = [
    "Strong analytical thinking",
    "Good communication skills",
    "Self-motivated learner",
    "Detail-oriented approach",
    "Adaptable to new challenges",
]

DEFAULT_IMPROVEMENT_AREAS = [
    "Developing specialized technical skills",
    "Building practical experience",
    "Expanding professional network",
    "Enhancing time management",
    "Building leadership skills",
]

DEFAULT_NEXT_STEPS = [
    "Research programs at colleges aligned with your career interests",
    "Seek hands-on experience in fields of interest",
    "Connect with professionals for informational interviews",
    "Take advanced courses in your areas of strength",
    "Develop a portfolio of achievements aligned with your goals",
]

MAJORS_BY_TITLE_KEYWORD = [
    (("engineer", "developer"), ["Computer Science", "Software Engineering", "Information Technology"]),
    (("business", "management"), ["Business Administration", "Management", "Marketing"]),
    (("healthcare", "medical"), ["Nursing", "Health Sciences", "Biology"]),
]

_CAREER_SECTION_RE = re.compile(r"recommended career paths.*?:.*?\n((?:.*?\n){1,30})", re.IGNORECASE)
_STRENGTHS_SECTION_RE = re.compile(r"strengths.*?:.*?\n((?:.*?\n){1,10})", re.IGNORECASE)
_IMPROVEMENT_SECTION_RE = re.compile(r"areas for development.*?:.*?\n((?:.*?\n){1,10})", re.IGNORECASE)
_STEPS_SECTION_RE = re.compile(r"recommended next steps.*?:.*?\n((?:.*?\n){1,10})", re.IGNORECASE)
# A heading of the next section ends the current one.
_SECTION_HEADING_RE = re.compile(
    r"^[\s#*]*(?:\d+\.\s*)?[\s#*]*(?:recommended career paths|strengths|areas for development|recommended next steps)\b",
    re.IGNORECASE | re.MULTILINE,
)

_ENTRY_SPLIT_RE = re.compile(r"(?=\n\d+\.|\n-|\n•)")
_TITLE_RE = re.compile(r"^\s*(?:\d+\.|-|•)\s*([^:\n]+)(?::|$)", re.MULTILINE)
_DESCRIPTION_RE = re.compile(r"description:?\s*([^\n]+)", re.IGNORECASE)
_INLINE_DESCRIPTION_RE = re.compile(r"^\s*(?:\d+\.|-|•)\s*[^:\n]+:\s*([^\n]+)", re.MULTILINE)
_EDUCATION_RE = re.compile(r"education(?:\s+requirements)?:?\s*((?:[^\n]+\n?){1,5})", re.IGNORECASE)
_MAJORS_RE = re.compile(r"(?:recommended\s+)?majors?:?\s*((?:[^\n]+\n?){1,5})", re.IGNORECASE)
_BULLET_PREFIX_RE = re.compile(r"^[•\-]\s*")
_STEP_PREFIX_RE = re.compile(r"^(?:[•\-]|\d+\.)\s*")


def _section_body(match: re.Match | None) -> str:
    if not match or not match.group(1):
        return ""
    body = match.group(1)
    heading = _SECTION_HEADING_RE.search(body)
    return body[: heading.start()] if heading else body


def _default_majors_for(title: str) -> List[str]:
    lowered = title.lower()
    for keywords, majors in MAJORS_BY_TITLE_KEYWORD:
        if any(k in lowered for k in keywords):
            return list(majors)
    return ["Relevant academic programs"]


def _parse_career_entry(entry: str) -> Dict[str, Any]:
    title_match = _TITLE_RE.search(entry)
    title = title_match.group(1).strip() if title_match else "Career option"

    desc_match = _DESCRIPTION_RE.search(entry) or _INLINE_DESCRIPTION_RE.search(entry)
    description = desc_match.group(1).strip() if desc_match else "Career aligned with your assessment results."

    education: List[str] = []
    edu_match = _EDUCATION_RE.search(entry)
    if edu_match:
        lines = [line.strip() for line in re.split(r"\n|;", edu_match.group(1))]
        education = [line for line in lines if line and "education" not in line.lower()][:3]
    if not education:
        education = ["Bachelor's degree", "Advanced certification"]

    majors: List[str] = []
    majors_match = _MAJORS_RE.search(entry)
    if majors_match:
        parts = [p.strip() for p in re.split(r"\n|;|,", majors_match.group(1))]
        majors = [
            p for p in parts
            if p and "major" not in p.lower() and "such as" not in p.lower()
        ][:3]
    if not majors:
        majors = _default_majors_for(title)

    return {
        "title": title,
        "description": description,
        "education_requirements": education,
        "major_recommendations": majors,
    }


def extract_career_paths(text: str) -> List[Dict[str, Any]]:
    body = _section_body(_CAREER_SECTION_RE.search(text or ""))
    careers: List[Dict[str, Any]] = []
    if body.strip():
        entries = [e for e in _ENTRY_SPLIT_RE.split(body) if e.strip()]
        careers = [_parse_career_entry(entry) for entry in entries]
    return careers or copy.deepcopy(DEFAULT_CAREER_PATHS)


def _extract_bullets(text: str, pattern: re.Pattern, default: List[str], *, numbered: bool = False) -> List[str]:
    section = pattern.search(text or "")
    if not section or not section.group(1):
        return list(default)
    out: List[str] = []
    for line in _section_body(section).split("\n"):
        stripped = line.strip()
        is_bullet = stripped.startswith("-") or stripped.startswith("•")
        if numbered and re.match(r"^\d+\.", stripped):
            is_bullet = True
        if not is_bullet:
            continue
        prefix_re = _STEP_PREFIX_RE if numbered else _BULLET_PREFIX_RE
        item = prefix_re.sub("", stripped).strip()
        if item:
            out.append(item)
    return out[:5]


def extract_strengths(text: str) -> List[str]:
    return _extract_bullets(text, _STRENGTHS_SECTION_RE, DEFAULT_STRENGTHS)


def extract_improvement_areas(text: str) -> List[str]:
    return _extract_bullets(text, _IMPROVEMENT_SECTION_RE, DEFAULT_IMPROVEMENT_AREAS)


def extract_recommended_steps(text: str) -> List[str]:
    return _extract_bullets(text, _STEPS_SECTION_RE, DEFAULT_NEXT_STEPS, numbered=True)


def fallback_analysis() -> Dict[str, Any]:
    return {
        "career_paths": copy.deepcopy(DEFAULT_CAREER_PATHS),
        "strengths": list(DEFAULT_STRENGTHS),
        "improvement_areas": list(DEFAULT_IMPROVEMENT_AREAS),
        "recommended_steps": list(DEFAULT_NEXT_STEPS),
    }


def build_analysis(text: str) -> Dict[str, Any]:
    if not (text or "").strip():
        return fallback_analysis()
    return {
        "career_paths": extract_career_paths(text),
        "strengths": extract_strengths(text),
        "improvement_areas": extract_improvement_areas(text),
        "recommended_steps": extract_recommended_steps(text),
    }
