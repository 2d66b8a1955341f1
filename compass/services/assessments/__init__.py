from .service import (
    get_assessment_results,
    get_assessment_status,
    get_comprehensive_results,
    get_dashboard_recommendations,
    get_questions,
    submit_assessment,
)

__all__ = [
    "get_assessment_results",
    "get_assessment_status",
    "get_comprehensive_results",
    "get_dashboard_recommendations",
    "get_questions",
    "submit_assessment",
]
