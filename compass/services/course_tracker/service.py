from __future__ import annotations

import logging
from typing import Any, Dict

from django.contrib.auth.models import User
from django.db import transaction

from compass.models import CourseTracker

from .serializers import serialize_course_tracker
from .validators import normalize_semesters

logger = logging.getLogger(__name__)


def get_or_create_tracker(user: User) -> CourseTracker:
    tracker, created = CourseTracker.objects.get_or_create(user=user, defaults={"semesters": []})
    if created:
        logger.info("course_tracker_created user=%s", user.id)
    return tracker


def get_course_tracker(user: User) -> Dict[str, Any]:
    return {"course_tracker": serialize_course_tracker(get_or_create_tracker(user))}


def save_course_tracker(user: User, semesters: Any) -> Dict[str, Any]:
    normalized = normalize_semesters(semesters)
    with transaction.atomic():
        tracker = get_or_create_tracker(user)
        tracker.semesters = normalized
        tracker.save()

    logger.info(
        "course_tracker_saved user=%s semesters=%s gpa=%.2f credits=%s",
        user.id,
        len(normalized),
        tracker.cumulative_gpa,
        tracker.total_credits,
    )
    return {
        "course_tracker": serialize_course_tracker(tracker),
        "cumulative_gpa": tracker.cumulative_gpa,
        "total_credits": tracker.total_credits,
    }


def recompute_all_trackers() -> int:
    count = 0
    for tracker in CourseTracker.objects.all().iterator():
        tracker.save()
        count += 1
    return count
