from __future__ import annotations

from compass.models import CourseTracker
from compass.services.shared.dto import CourseTrackerPayload


def serialize_course_tracker(tracker: CourseTracker) -> CourseTrackerPayload:
    return {
        "id": tracker.id,
        "semesters": list(tracker.semesters or []),
        "cumulative_gpa": float(tracker.cumulative_gpa or 0.0),
        "total_credits": float(tracker.total_credits or 0.0),
        "updated_at": tracker.updated_at.strftime("%Y-%m-%d %H:%M") if tracker.updated_at else "",
    }
