from django.test import SimpleTestCase

from compass.academic.gpa_calculator import (
    calculate_all_gpas,
    calculate_gpa,
    course_grade_points,
    format_gpa,
    get_letter_grade,
)


def _course(grade, credits=1, course_type="regular", completed=True, name="Course"):
    return {
        "name": name,
        "course_type": course_type,
        "credits": credits,
        "term": "fall",
        "year": 2024,
        "grade": grade,
        "completed": completed,
    }


class GpaCalculatorTests(SimpleTestCase):
    def test_no_eligible_courses_gives_zero(self):
        self.assertEqual(calculate_gpa([]), 0.0)
        self.assertEqual(calculate_gpa(None), 0.0)
        out = calculate_all_gpas([{"term": "fall", "year": 2024, "courses": [_course("A", completed=False)]}])
        self.assertEqual(out["cumulative_gpa"], 0.0)
        self.assertEqual(out["total_credits"], 0.0)
        self.assertEqual(out["semesters"][0]["gpa"], 0.0)

    def test_single_regular_a(self):
        self.assertEqual(calculate_gpa([_course("A")]), 4.0)

    def test_ap_bonus_is_not_capped(self):
        self.assertEqual(calculate_gpa([_course("A", course_type="ap")]), 5.0)

    def test_honors_bonus(self):
        self.assertAlmostEqual(course_grade_points(_course("B+", course_type="honors")), 3.8)

    def test_f_with_ap_bonus_counts_bonus(self):
        self.assertEqual(course_grade_points(_course("F", course_type="ap")), 1.0)

    def test_unknown_course_type_has_no_bonus(self):
        self.assertEqual(course_grade_points(_course("B", course_type="dual")), 3.0)

    def test_w_and_p_do_not_change_results(self):
        base = [_course("A", credits=2), _course("C", credits=1)]
        for letter in ("W", "P", "I"):
            with_extra = base + [_course(letter, credits=3)]
            self.assertEqual(calculate_gpa(with_extra), calculate_gpa(base))
            self.assertEqual(
                calculate_all_gpas([{"courses": with_extra}])["total_credits"],
                calculate_all_gpas([{"courses": base}])["total_credits"],
            )

    def test_incomplete_and_ungraded_courses_are_excluded(self):
        courses = [_course("A"), _course("F", completed=False), _course(None), _course("")]
        self.assertEqual(calculate_gpa(courses), 4.0)

    def test_grade_letters_are_case_insensitive(self):
        self.assertEqual(calculate_gpa([_course(" b- ")]), 2.7)

    def test_cumulative_is_credit_weighted(self):
        out = calculate_all_gpas(
            [
                {"term": "fall", "year": 2024, "courses": [_course("A", credits=4)]},
                {"term": "spring", "year": 2025, "courses": [_course("F", credits=1)]},
            ]
        )
        self.assertEqual(out["semesters"][0]["gpa"], 4.0)
        self.assertEqual(out["semesters"][1]["gpa"], 0.0)
        self.assertEqual(out["cumulative_gpa"], 3.2)
        self.assertEqual(out["total_credits"], 5.0)

    def test_gpa_is_rounded_to_two_places(self):
        self.assertEqual(calculate_gpa([_course("A"), _course("B+"), _course("C-")]), 3.0)
        self.assertEqual(calculate_gpa([_course("A"), _course("B"), _course("B")]), 3.33)

    def test_non_finite_credits_are_ignored(self):
        courses = [_course("A", credits=float("nan")), _course("B", credits=float("inf")), _course("C", credits=1)]
        self.assertEqual(calculate_gpa(courses), 2.0)
        self.assertEqual(calculate_all_gpas([{"courses": courses}])["total_credits"], 1.0)

    def test_input_semesters_are_not_mutated(self):
        semesters = [{"term": "fall", "year": 2024, "courses": [_course("A")]}]
        calculate_all_gpas(semesters)
        self.assertNotIn("gpa", semesters[0])

    def test_format_gpa(self):
        self.assertEqual(format_gpa(3.2), "3.20")
        self.assertEqual(format_gpa("bad"), "0.00")

    def test_get_letter_grade(self):
        self.assertEqual(get_letter_grade(98), "A+")
        self.assertEqual(get_letter_grade(93), "A")
        self.assertEqual(get_letter_grade(85), "B")
        self.assertEqual(get_letter_grade(60), "D-")
        self.assertEqual(get_letter_grade(59.9), "F")
