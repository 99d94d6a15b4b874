import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.role_insights import (  # noqa: E402
    enrich_with_role_insights,
    find_missing_role_skills,
    generate_role_recommendations,
)
from app.schemas.analysis import JobRole, KeyFindings, ResumeAnalysis, SectionAssessment  # noqa: E402
from app.taxonomy import get_default_role_catalog  # noqa: E402


def _analysis(**overrides) -> ResumeAnalysis:
    values = {
        "overall_score": 60,
        "summary": "Reasonable resume.",
        "sections": [
            SectionAssessment(
                name="Technical Skills",
                score=6,
                feedback=["Good use of Python and SQL in recent projects"],
            ),
        ],
    }
    values.update(overrides)
    return ResumeAnalysis(**values)


class RoleInsightsTests(unittest.TestCase):
    def test_lowercase_title_appends_missing_catalog_skills(self):
        analysis = enrich_with_role_insights(_analysis(), "data scientist")
        missing = analysis.key_findings.missing_skills
        self.assertIn("Machine Learning", missing)
        self.assertIn("TensorFlow", missing)
        self.assertNotIn("Python", missing)
        self.assertNotIn("SQL", missing)

    def test_existing_missing_skills_are_not_duplicated(self):
        analysis = _analysis(key_findings=KeyFindings(missing_skills=["Machine Learning fundamentals"]))
        enriched = enrich_with_role_insights(analysis, "Data Scientist")
        missing = enriched.key_findings.missing_skills
        self.assertEqual(missing[0], "Machine Learning fundamentals")
        self.assertNotIn("Machine Learning", missing)
        self.assertEqual(len(missing), len(set(missing)))

    def test_enrichment_only_appends(self):
        analysis = _analysis(key_findings=KeyFindings(strengths=["Clear layout"], missing_skills=["Spark"]))
        before = analysis.model_dump()
        enriched = enrich_with_role_insights(analysis, "software-engineer")
        after = enriched.model_dump()

        self.assertEqual(after["overall_score"], before["overall_score"])
        self.assertEqual(after["sections"], before["sections"])
        self.assertEqual(after["key_findings"]["strengths"], before["key_findings"]["strengths"])
        self.assertEqual(
            after["key_findings"]["missing_skills"][: len(before["key_findings"]["missing_skills"])],
            before["key_findings"]["missing_skills"],
        )
        self.assertGreater(len(after["job_alignment"]["recommendations"]), 0)

    def test_unknown_role_leaves_analysis_unchanged(self):
        analysis = _analysis()
        before = analysis.model_dump()
        enriched = enrich_with_role_insights(analysis, "Astronaut")
        self.assertEqual(enriched.model_dump(), before)

    def test_recommendations_skip_ones_already_present(self):
        role = get_default_role_catalog().find_role("Sales Representative")
        existing = generate_role_recommendations(role, _analysis())
        analysis = _analysis()
        analysis.job_alignment.recommendations.extend(existing)
        enriched = enrich_with_role_insights(analysis, "Sales Representative")
        self.assertEqual(enriched.job_alignment.recommendations, existing)


class RoleRecommendationRuleTests(unittest.TestCase):
    def setUp(self):
        self.catalog = get_default_role_catalog()

    def test_technology_low_score_names_top_skills(self):
        role = self.catalog.find_role("Data Scientist")
        recommendations = generate_role_recommendations(role, _analysis(overall_score=55))
        self.assertEqual(len(recommendations), 2)
        self.assertIn("Python, R, SQL", recommendations[0])

    def test_technology_high_score_keeps_general_advice_only(self):
        role = self.catalog.find_role("Software Engineer")
        recommendations = generate_role_recommendations(role, _analysis(overall_score=85))
        self.assertEqual(len(recommendations), 1)

    def test_management_rule_reacts_to_missing_leadership(self):
        role = self.catalog.find_role("Product Manager")
        analysis = _analysis(key_findings=KeyFindings(missing_skills=["Leadership"]))
        recommendations = generate_role_recommendations(role, analysis)
        self.assertEqual(len(recommendations), 2)
        self.assertIn("leadership", recommendations[0])

    def test_marketing_rule_suggests_projects_section(self):
        role = self.catalog.find_role("Marketing Manager")
        self.assertEqual(len(generate_role_recommendations(role, _analysis())), 2)
        with_projects = _analysis(sections=[SectionAssessment(name="Projects", score=7)])
        self.assertEqual(len(generate_role_recommendations(role, with_projects)), 1)

    def test_unknown_category_yields_nothing(self):
        role = JobRole.model_construct(id="x", title="X", category="Legal", common_skills=())
        self.assertEqual(generate_role_recommendations(role, _analysis()), [])

    def test_missing_skills_use_first_skills_section_only(self):
        role = self.catalog.find_role("Data Scientist")
        analysis = _analysis(
            sections=[
                SectionAssessment(name="Skills", feedback=["Strong statistics background"]),
                SectionAssessment(name="Skills Summary", feedback=["Pandas and Numpy throughout"]),
            ]
        )
        missing = find_missing_role_skills(role, analysis)
        self.assertNotIn("Statistics", missing)
        self.assertIn("Pandas", missing)


if __name__ == "__main__":
    unittest.main()
