from django.contrib.auth.models import User
from django.test import SimpleTestCase, TestCase

from compass.academic.gpa_calculator import calculate_all_gpas
from compass.models import CourseTracker
from compass.services.course_tracker.service import get_course_tracker, save_course_tracker
from compass.services.course_tracker.validators import clamp_credits, normalize_semesters
from compass.services.shared.errors import ValidationError


def _semesters():
    return [
        {
            "term": "Fall",
            "year": 2024,
            "courses": [
                {"name": "AP Calculus", "courseType": "AP", "credits": 1, "grade": "a", "completed": True},
                {"name": "English 10", "course_type": "regular", "credits": 1, "grade": "B", "completed": True},
                {"name": "Chemistry", "credits": 1, "completed": False},
            ],
        },
        {
            "term": "spring",
            "year": 2025,
            "courses": [
                {"name": "Band", "credits": 0.5, "grade": "P", "completed": True},
                {"name": "History", "credits": 1, "grade": "C+", "completed": True, "semester": "Spring"},
            ],
        },
    ]


class CourseTrackerValidatorTests(SimpleTestCase):
    def test_aliases_and_defaults(self):
        out = normalize_semesters(_semesters())
        calc = out[0]["courses"][0]
        self.assertEqual(calc["course_type"], "ap")
        self.assertEqual(calc["grade"], "A")
        self.assertEqual(calc["term"], "fall")
        self.assertEqual(calc["year"], 2024)
        self.assertIsNone(out[0]["courses"][2]["grade"])
        self.assertEqual(out[0]["courses"][2]["course_type"], "regular")

    def test_credits_are_clamped(self):
        self.assertEqual(clamp_credits(9), 5.0)
        self.assertEqual(clamp_credits(0), 0.5)
        self.assertEqual(clamp_credits("x"), 1.0)

    def test_non_finite_credits_fall_back_to_default(self):
        for raw in ("nan", float("nan"), "inf", float("-inf")):
            self.assertEqual(clamp_credits(raw), 1.0)

    def test_completed_flag_strings(self):
        courses = [
            {"name": name, "credits": 1, "grade": "A", "completed": flag}
            for name, flag in (("A", "false"), ("B", "0"), ("C", "no"), ("D", "true"), ("E", "1"), ("F", True), ("G", None))
        ]
        out = normalize_semesters([{"term": "fall", "year": 2024, "courses": courses}])
        self.assertEqual(
            [c["completed"] for c in out[0]["courses"]],
            [False, False, False, True, True, True, False],
        )

    def test_year_must_be_a_whole_number(self):
        for year in (2024.7, True, "2024.5"):
            with self.assertRaises(ValidationError):
                normalize_semesters([{"term": "fall", "year": year, "courses": []}])
        self.assertEqual(normalize_semesters([{"term": "fall", "year": 2024.0, "courses": []}])[0]["year"], 2024)
        with self.assertRaises(ValidationError):
            normalize_semesters([{"term": "fall", "year": 2024, "courses": [{"name": "X", "year": 2024.5}]}])

    def test_duplicate_semester_is_rejected(self):
        semesters = _semesters()
        semesters[1]["term"] = "FALL"
        semesters[1]["year"] = 2024
        with self.assertRaises(ValidationError) as ctx:
            normalize_semesters(semesters)
        self.assertIn("Duplicate semester", str(ctx.exception))

    def test_payload_must_be_a_list(self):
        with self.assertRaises(ValidationError):
            normalize_semesters({"term": "fall"})

    def test_unknown_grade_and_type_are_rejected(self):
        bad_grade = [{"term": "fall", "year": 2024, "courses": [{"name": "X", "grade": "Z"}]}]
        bad_type = [{"term": "fall", "year": 2024, "courses": [{"name": "X", "course_type": "ib"}]}]
        with self.assertRaises(ValidationError):
            normalize_semesters(bad_grade)
        with self.assertRaises(ValidationError):
            normalize_semesters(bad_type)


class CourseTrackerServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="u1", password="x")

    def test_get_creates_empty_tracker(self):
        out = get_course_tracker(self.user)["course_tracker"]
        self.assertEqual(out["semesters"], [])
        self.assertEqual(out["cumulative_gpa"], 0.0)
        self.assertEqual(CourseTracker.objects.filter(user=self.user).count(), 1)

    def test_saved_caches_match_engine(self):
        out = save_course_tracker(self.user, _semesters())
        tracker = CourseTracker.objects.get(user=self.user)
        expected = calculate_all_gpas(normalize_semesters(_semesters()))

        self.assertEqual(tracker.cumulative_gpa, expected["cumulative_gpa"])
        self.assertEqual(tracker.total_credits, expected["total_credits"])
        self.assertEqual([s["gpa"] for s in tracker.semesters], [s["gpa"] for s in expected["semesters"]])
        # AP A (5.0) + B (3.0) + C+ (2.3) over 3 credits
        self.assertEqual(out["cumulative_gpa"], 3.43)
        self.assertEqual(out["total_credits"], 3.0)
        self.assertEqual(tracker.semesters[0]["gpa"], 4.0)

    def test_resave_replaces_semesters(self):
        save_course_tracker(self.user, _semesters())
        out = save_course_tracker(self.user, [])
        self.assertEqual(out["cumulative_gpa"], 0.0)
        self.assertEqual(CourseTracker.objects.filter(user=self.user).count(), 1)

    def test_invalid_payload_leaves_tracker_untouched(self):
        save_course_tracker(self.user, _semesters())
        with self.assertRaises(ValidationError):
            save_course_tracker(self.user, "not a list")
        self.assertEqual(CourseTracker.objects.get(user=self.user).total_credits, 3.0)

    def test_nan_credits_are_saved_with_default_credit(self):
        out = save_course_tracker(
            self.user,
            [{"term": "fall", "year": 2024, "courses": [{"name": "Bio", "credits": "nan", "grade": "A", "completed": True}]}],
        )
        self.assertEqual(out["cumulative_gpa"], 4.0)
        self.assertEqual(out["total_credits"], 1.0)
        self.assertEqual(CourseTracker.objects.get(user=self.user).semesters[0]["courses"][0]["credits"], 1.0)

    def test_string_false_completed_is_excluded(self):
        out = save_course_tracker(
            self.user,
            [{"term": "fall", "year": 2024, "courses": [{"name": "Bio", "credits": 1, "grade": "A", "completed": "false"}]}],
        )
        self.assertEqual(out["cumulative_gpa"], 0.0)
        self.assertEqual(out["total_credits"], 0.0)

    def test_model_save_recomputes_caches(self):
        tracker = CourseTracker.objects.create(user=self.user, semesters=normalize_semesters(_semesters()))
        tracker.cumulative_gpa = 0.0
        tracker.save(update_fields=["cumulative_gpa"])
        tracker.refresh_from_db()
        self.assertEqual(tracker.cumulative_gpa, 3.43)
