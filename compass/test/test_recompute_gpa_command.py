from io import StringIO

from django.contrib.auth.models import User
from django.core.management import call_command
from django.test import TestCase

from compass.models import CourseTracker

SEMESTERS = [
    {
        "term": "fall",
        "year": 2024,
        "courses": [
            {"name": "Algebra", "course_type": "regular", "credits": 4, "grade": "A", "completed": True,
             "term": "fall", "year": 2024},
        ],
    },
    {
        "term": "spring",
        "year": 2025,
        "courses": [
            {"name": "Art", "course_type": "regular", "credits": 1, "grade": "F", "completed": True,
             "term": "spring", "year": 2025},
        ],
    },
]


class RecomputeGpaCommandTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="u1", password="x")
        CourseTracker.objects.create(user=self.user, semesters=SEMESTERS)
        # Simulate caches written by an older engine.
        CourseTracker.objects.filter(user=self.user).update(cumulative_gpa=2.0, total_credits=0)

    def test_recompute_all(self):
        out = StringIO()
        call_command("recompute_gpa", stdout=out)
        tracker = CourseTracker.objects.get(user=self.user)
        self.assertEqual(tracker.cumulative_gpa, 3.2)
        self.assertEqual(tracker.total_credits, 5.0)
        self.assertIn("Recomputed 1 course tracker", out.getvalue())

    def test_recompute_single_user(self):
        out = StringIO()
        call_command("recompute_gpa", user=self.user.id, stdout=out)
        self.assertEqual(CourseTracker.objects.get(user=self.user).cumulative_gpa, 3.2)
        self.assertIn(f"user={self.user.id}", out.getvalue())

    def test_unknown_user(self):
        err = StringIO()
        call_command("recompute_gpa", user=999, stderr=err)
        self.assertIn("999", err.getvalue())
