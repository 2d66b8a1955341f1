import json

from django.test import SimpleTestCase

from compass.academic.fallback_plan import get_fallback_academic_plan
from compass.academic.plan_extractor import (
    FALLBACK_WARNING,
    extract_academic_plan,
    parse_plan_json,
)
from compass.academic.plan_schema import YEAR_KEYS
from compass.services.shared.errors import PlanParseFailure


def _model_plan():
    return {
        "focusAreas": ["Computer Science", "Mathematics"],
        "careerAlignment": ["Software Engineer"],
        "fourYearPlan": {
            "freshman": [
                {
                    "name": "Intro to Programming",
                    "description": "Python basics",
                    "type": "elective",
                    "year": 9,
                    "semester": "Fall",
                    "credits": 1,
                    "prerequisites": [],
                }
            ],
            "sophomore": [],
            "junior": [],
            "senior": [],
        },
        "extracurricularRecommendations": ["Robotics club"],
        "summerActivities": ["Coding camp"],
        "postGraduationRecommendations": ["Apply to engineering programs"],
    }


class PlanExtractorTests(SimpleTestCase):
    def test_valid_json_is_returned_unchanged(self):
        plan = _model_plan()
        out = extract_academic_plan(json.dumps(plan), grade=10)
        self.assertFalse(out.used_fallback)
        self.assertEqual(out.strategy, "direct")
        self.assertEqual(out.plan, plan)
        self.assertEqual(out.warnings, [])

    def test_prose_wrapped_object_is_extracted(self):
        plan = _model_plan()
        text = "Here is the plan you asked for:\n" + json.dumps(plan, indent=2) + "\nGood luck!"
        out = extract_academic_plan(text, grade=10)
        self.assertFalse(out.used_fallback)
        self.assertEqual(out.strategy, "embedded")
        self.assertEqual(out.plan, plan)

    def test_comments_and_trailing_commas_are_cleaned(self):
        text = (
            "```json\n"
            "{\n"
            '  "focusAreas": ["Biology",], // main focus\n'
            '  "careerAlignment": ["Physician"],\n'
            '  /* years */\n'
            '  "fourYearPlan": {"freshman": [], "sophomore": [], "junior": [], "senior": [],},\n'
            '  "extracurricularRecommendations": ["https://hosa.org volunteering"],\n'
            '  "summerActivities": [],\n'
            '  "postGraduationRecommendations": ["Pre-med"],\n'
            "}\n"
            "```"
        )
        out = extract_academic_plan(text, grade=9)
        self.assertFalse(out.used_fallback)
        self.assertEqual(out.strategy, "cleaned")
        self.assertEqual(out.plan["focusAreas"], ["Biology"])
        self.assertEqual(out.plan["extracurricularRecommendations"], ["https://hosa.org volunteering"])

    def test_garbage_gives_fallback_for_grade(self):
        out = extract_academic_plan("I cannot help with that.", grade=11)
        self.assertTrue(out.used_fallback)
        self.assertEqual(out.strategy, "fallback")
        self.assertEqual(out.plan, get_fallback_academic_plan(11))
        self.assertEqual(out.warnings[0], FALLBACK_WARNING)
        for key in YEAR_KEYS:
            self.assertTrue(out.plan["fourYearPlan"][key])

    def test_empty_text_gives_fallback(self):
        out = extract_academic_plan("", grade=9)
        self.assertTrue(out.used_fallback)

    def test_missing_fields_give_fallback(self):
        plan = _model_plan()
        del plan["summerActivities"]
        del plan["fourYearPlan"]["senior"]
        out = extract_academic_plan(json.dumps(plan), grade=12)
        self.assertTrue(out.used_fallback)
        self.assertEqual(out.missing_fields, ["summerActivities", "fourYearPlan.senior"])
        self.assertEqual(out.plan, get_fallback_academic_plan(12))

    def test_object_inside_array_is_recovered(self):
        out = extract_academic_plan(json.dumps([_model_plan()]), grade=9)
        self.assertFalse(out.used_fallback)
        self.assertEqual(out.strategy, "embedded")

    def test_out_of_range_values_are_warnings_only(self):
        plan = _model_plan()
        plan["fourYearPlan"]["freshman"][0]["semester"] = "Summer"
        out = extract_academic_plan(json.dumps(plan), grade=9)
        self.assertFalse(out.used_fallback)
        self.assertEqual(len(out.warnings), 1)
        self.assertIn("freshman[0]", out.warnings[0])

    def test_parse_plan_json_raises_when_all_strategies_fail(self):
        with self.assertRaises(PlanParseFailure) as ctx:
            parse_plan_json("{not json")
        self.assertIn("direct", str(ctx.exception))
        self.assertIn("cleaned", str(ctx.exception))
