from django.test import SimpleTestCase

from compass.academic.analysis_extractor import (
    DEFAULT_CAREER_PATHS,
    DEFAULT_NEXT_STEPS,
    DEFAULT_STRENGTHS,
    build_analysis,
    extract_career_paths,
    fallback_analysis,
)

ANALYSIS_TEXT = """Thanks for completing the assessments.

RECOMMENDED CAREER PATHS:
1. Software Engineer: Builds and maintains applications.
   Education Requirements: Bachelor's degree in Computer Science
   Recommended Majors: Computer Science, Software Engineering
2. Data Scientist: Finds patterns in large datasets.

STRENGTHS:
- Logical reasoning
- Curiosity

AREAS FOR DEVELOPMENT:
- Public speaking

RECOMMENDED NEXT STEPS:
1. Join the robotics club
2. Take AP Computer Science
"""


class AnalysisExtractorTests(SimpleTestCase):
    def test_career_paths_are_scraped(self):
        careers = extract_career_paths(ANALYSIS_TEXT)
        self.assertEqual([c["title"] for c in careers], ["Software Engineer", "Data Scientist"])
        self.assertEqual(careers[0]["description"], "Builds and maintains applications.")
        self.assertEqual(careers[0]["education_requirements"][0], "Bachelor's degree in Computer Science")
        self.assertEqual(careers[0]["major_recommendations"], ["Computer Science", "Software Engineering"])
        self.assertEqual(careers[1]["major_recommendations"], ["Relevant academic programs"])

    def test_sections_stop_at_next_heading(self):
        analysis = build_analysis(ANALYSIS_TEXT)
        self.assertEqual(analysis["strengths"], ["Logical reasoning", "Curiosity"])
        self.assertEqual(analysis["improvement_areas"], ["Public speaking"])
        self.assertEqual(analysis["recommended_steps"], ["Join the robotics club", "Take AP Computer Science"])

    def test_missing_sections_use_defaults(self):
        analysis = build_analysis("You seem great.\n")
        self.assertEqual(analysis["career_paths"], DEFAULT_CAREER_PATHS)
        self.assertEqual(analysis["strengths"], DEFAULT_STRENGTHS)
        self.assertEqual(analysis["recommended_steps"], DEFAULT_NEXT_STEPS)

    def test_empty_text_is_fallback(self):
        self.assertEqual(build_analysis("  "), fallback_analysis())

    def test_fallback_is_a_copy(self):
        analysis = fallback_analysis()
        analysis["career_paths"][0]["title"] = "Changed"
        self.assertNotEqual(DEFAULT_CAREER_PATHS[0]["title"], "Changed")
