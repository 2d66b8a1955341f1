from django.contrib.auth.models import User
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from compass.academic.assessments import ASSESSMENT_TYPES
from compass.academic.gpa_calculator import calculate_all_gpas


class StudentProfile(models.Model):
    ROLE_STUDENT = "student"
    ROLE_CHOICES = [
        ("student", "Student"),
        ("parent", "Parent"),
        ("counselor", "Counselor"),
        ("admin", "Admin"),
    ]

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="compass_profile")
    name = models.CharField(max_length=255, blank=True, default="")
    role = models.CharField(max_length=16, choices=ROLE_CHOICES, default=ROLE_STUDENT)
    grade = models.PositiveSmallIntegerField(
        default=9,
        validators=[MinValueValidator(9), MaxValueValidator(12)],
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def display_name(self) -> str:
        return (self.name or "").strip() or self.user.get_full_name() or self.user.email or self.user.username

    def __str__(self):
        return f"{self.user.username} grade={self.grade}"


class Assessment(models.Model):
    TYPE_CHOICES = [(t, t.capitalize()) for t in ASSESSMENT_TYPES]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="assessments")
    type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    completed_at = models.DateTimeField(default=timezone.now)
    # [{"question_id": "p1", "response": 4}, ...]
    responses = models.JSONField(default=list, blank=True)
    # [{"category": "...", "score": 85.0, "description": "..."}, ...]
    results = models.JSONField(default=list, blank=True)
    raw_score = models.FloatField(null=True, blank=True)
    valid = models.BooleanField(default=True)

    class Meta:
        ordering = ["-completed_at"]
        indexes = [
            models.Index(fields=["user", "type", "-completed_at"], name="compass_assess_user_type_idx"),
        ]

    def __str__(self):
        return f"{self.user.username} {self.type} {self.completed_at:%Y-%m-%d}"


class CourseTracker(models.Model):
    """
    Per-learner course history. ``cumulative_gpa`` and ``total_credits`` are
    caches derived from ``semesters`` and are rewritten on every save.
    """

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="course_tracker")
    semesters = models.JSONField(default=list, blank=True)
    cumulative_gpa = models.FloatField(default=0.0)
    total_credits = models.FloatField(default=0.0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def recalculate(self) -> None:
        computed = calculate_all_gpas(self.semesters)
        self.semesters = computed["semesters"]
        self.cumulative_gpa = computed["cumulative_gpa"]
        self.total_credits = computed["total_credits"]

    def save(self, *args, **kwargs):
        self.recalculate()
        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"semesters", "cumulative_gpa", "total_credits"}
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.user.username} gpa={self.cumulative_gpa:.2f} credits={self.total_credits}"


class AcademicPlan(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="academic_plan")
    plan = models.JSONField(default=dict)
    used_fallback = models.BooleanField(default=False)
    parse_strategy = models.CharField(max_length=16, blank=True, default="")
    provider = models.CharField(max_length=32, blank=True, default="")
    model_name = models.CharField(max_length=255, blank=True, default="")
    warnings = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        source = "fallback" if self.used_fallback else (self.provider or "ai")
        return f"{self.user.username} plan ({source})"


class AdvisorChatHistory(models.Model):
    CHANNEL_ADVISOR = "advisor"
    CHANNEL_PLAN = "plan"
    CHANNEL_CHOICES = [
        (CHANNEL_ADVISOR, "Advisor"),
        (CHANNEL_PLAN, "Academic Plan"),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="advisor_chats")
    channel = models.CharField(max_length=16, choices=CHANNEL_CHOICES, default=CHANNEL_ADVISOR)
    question = models.TextField()
    answer = models.TextField()
    fallback_used = models.BooleanField(default=False)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["user", "channel", "timestamp"], name="compass_chat_user_chan_idx"),
        ]

    def __str__(self):
        return f"{self.user.username} [{self.channel}]: {self.question[:20]}..."
