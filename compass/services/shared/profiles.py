from __future__ import annotations

from django.contrib.auth.models import User

from compass.models import StudentProfile

from .dto import UserSummaryPayload


def get_or_create_profile(user: User) -> StudentProfile:
    profile, _ = StudentProfile.objects.get_or_create(
        user=user,
        defaults={"name": user.get_full_name() or user.username},
    )
    return profile


def build_user_summary(user: User) -> UserSummaryPayload:
    profile = get_or_create_profile(user)
    return {"name": profile.display_name(), "grade": int(profile.grade)}
