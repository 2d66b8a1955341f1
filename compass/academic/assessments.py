from __future__ import annotations

import copy
from typing import Any, Dict, List

PERSONALITY = "personality"
SKILLS = "skills"
INTERESTS = "interests"
APTITUDE = "aptitude"

ASSESSMENT_TYPES = (PERSONALITY, SKILLS, INTERESTS, APTITUDE)

# Short descriptions used inside prompts.
ASSESSMENT_DESCRIPTIONS: Dict[str, str] = {
    INTERESTS: "Interest assessment that identifies academic and career preferences.",
    PERSONALITY: "Personality assessment that helps understand how traits influence educational paths.",
    SKILLS: "Skills assessment that identifies technical and soft skill proficiencies.",
    APTITUDE: "Aptitude assessment that evaluates inherent abilities and potential in different fields of study.",
}

# Longer descriptions shown with the questionnaire.
QUESTIONNAIRE_DESCRIPTIONS: Dict[str, str] = {
    PERSONALITY: "This assessment will help us understand your personality traits and how they relate to potential fields of study and career paths.",
    SKILLS: "This assessment will identify your strongest skills and abilities to match you with fields where you can excel.",
    INTERESTS: "This assessment will explore your academic and career interests to find fields that will keep you engaged and motivated.",
    APTITUDE: "This assessment will measure your natural abilities and potential for success in different fields of study.",
}

LIKERT_OPTIONS: List[Dict[str, Any]] = [
    {"id": "1", "text": "Strongly Disagree", "value": 1},
    {"id": "2", "text": "Disagree", "value": 2},
    {"id": "3", "text": "Neutral", "value": 3},
    {"id": "4", "text": "Agree", "value": 4},
    {"id": "5", "text": "Strongly Agree", "value": 5},
]


def _scale(qid: str, text: str) -> Dict[str, Any]:
    return {"id": qid, "text": text, "type": "scale", "options": LIKERT_OPTIONS}


QUESTION_BANK: Dict[str, List[Dict[str, Any]]] = {
    PERSONALITY: [
        _scale("p1", "I enjoy being the center of attention at social gatherings."),
        _scale("p2", "I prefer to work on projects alone rather than in groups."),
        _scale("p3", "I often come up with creative solutions to problems."),
        _scale("p4", "I tend to plan activities in advance rather than act spontaneously."),
        _scale("p5", "I find it easy to empathize with people whose experiences are different from mine."),
    ],
    SKILLS: [
        _scale("s1", "I am good at analyzing data and finding patterns."),
        _scale("s2", "I can clearly explain complex concepts to others."),
        {
            "id": "s3",
            "text": "Which of these activities do you excel at?",
            "type": "multiple_choice",
            "options": [
                {"id": "a", "text": "Writing and communication", "value": "writing"},
                {"id": "b", "text": "Mathematical calculations", "value": "math"},
                {"id": "c", "text": "Artistic creation", "value": "art"},
                {"id": "d", "text": "Building or fixing things", "value": "mechanical"},
            ],
        },
    ],
    INTERESTS: [
        _scale("i1", "I enjoy learning about scientific discoveries and theories."),
        {
            "id": "i2",
            "text": "I would prefer to spend a day:",
            "type": "multiple_choice",
            "options": [
                {"id": "a", "text": "Reading literature or writing", "value": "humanities"},
                {"id": "b", "text": "Solving math problems or coding", "value": "stem"},
                {"id": "c", "text": "Creating art or music", "value": "arts"},
                {"id": "d", "text": "Learning about business or economics", "value": "business"},
            ],
        },
    ],
    APTITUDE: [
        {
            "id": "a1",
            "text": "If x + y = 10 and 2x - y = 5, what is the value of x?",
            "type": "multiple_choice",
            "options": [
                {"id": "a", "text": "3", "value": "a"},
                {"id": "b", "text": "5", "value": "b"},
                {"id": "c", "text": "7", "value": "c"},
                {"id": "d", "text": "9", "value": "d"},
            ],
        },
        {
            "id": "a2",
            "text": "In a paragraph, explain how you would approach solving a complex problem.",
            "type": "open_ended",
        },
    ],
}

COURSES_BY_CATEGORY_KEYWORD = [
    ("science", ["AP Biology", "AP Chemistry", "AP Physics", "Computer Science"]),
    ("business", ["Economics", "Business Studies", "Statistics", "Accounting"]),
    ("art", ["Studio Art", "Art History", "Design", "Photography"]),
    ("engineer", ["Calculus", "Physics", "Computer Science", "Engineering Design"]),
    ("human", ["AP Psychology", "Sociology", "Ethics", "Philosophy"]),
]
DEFAULT_CATEGORY_COURSES = ["Advanced Mathematics", "English Literature", "History", "Foreign Language"]


def is_assessment_type(value: Any) -> bool:
    return str(value or "") in ASSESSMENT_TYPES


def get_questionnaire(assessment_type: str) -> Dict[str, Any]:
    return {
        "type": assessment_type,
        "title": f"{assessment_type.capitalize()} Assessment",
        "description": QUESTIONNAIRE_DESCRIPTIONS.get(assessment_type, ""),
        "questions": copy.deepcopy(QUESTION_BANK.get(assessment_type, [])),
    }


def question_text(question_id: str) -> str:
    for questions in QUESTION_BANK.values():
        for q in questions:
            if q["id"] == question_id:
                return q["text"]
    return f"Question about {str(question_id).replace('-', ' ')}"


def courses_for_category(category: str) -> List[str]:
    lowered = (category or "").lower()
    for keyword, courses in COURSES_BY_CATEGORY_KEYWORD:
        if keyword in lowered:
            return list(courses[:4])
    return list(DEFAULT_CATEGORY_COURSES)
