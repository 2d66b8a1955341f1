from django.test import SimpleTestCase

from compass.academic.fallback_plan import (
    clamp_grade_level,
    get_default_courses_for_year,
    get_fallback_academic_plan,
    year_label_for_grade,
)
from compass.academic.plan_schema import YEAR_KEYS


class FallbackPlanTests(SimpleTestCase):
    def test_every_year_bucket_is_non_empty(self):
        for grade in (9, 10, 11, 12):
            plan = get_fallback_academic_plan(grade)
            for key in YEAR_KEYS:
                self.assertTrue(plan["fourYearPlan"][key], f"{grade} {key}")

    def test_courses_carry_their_year(self):
        plan = get_fallback_academic_plan(9)
        for offset, key in enumerate(YEAR_KEYS):
            self.assertTrue(all(c["year"] == 9 + offset for c in plan["fourYearPlan"][key]))

    def test_grade_is_clamped(self):
        self.assertEqual(clamp_grade_level(7), 9)
        self.assertEqual(clamp_grade_level(15), 12)
        self.assertEqual(clamp_grade_level("11"), 11)
        self.assertEqual(clamp_grade_level(None), 9)
        self.assertEqual(year_label_for_grade(12), "senior")

    def test_summer_activity_mentions_current_year(self):
        plan = get_fallback_academic_plan(11)
        self.assertIn("junior preparation", plan["summerActivities"][0])

    def test_default_courses_are_copies(self):
        courses = get_default_courses_for_year(9)
        courses[0]["name"] = "Changed"
        self.assertNotEqual(get_default_courses_for_year(9)[0]["name"], "Changed")
        self.assertEqual(get_default_courses_for_year(8), [])
