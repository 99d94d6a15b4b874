from __future__ import annotations

import logging
from typing import Callable

from app.schemas.analysis import JobRole, ResumeAnalysis
from app.taxonomy import RoleCatalogProvider, get_default_role_catalog

logger = logging.getLogger(__name__)

MAX_ROLE_RECOMMENDATIONS = 3

RecommendationRule = Callable[[JobRole, ResumeAnalysis], list[str]]


def _mentions(items: list[str], fragment: str) -> bool:
    return any(fragment in item.lower() for item in items)


def _technology_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    recommendations: list[str] = []
    if analysis.overall_score < 70:
        top_skills = ", ".join(role.common_skills[:3])
        recommendations.append(
            f"Consider adding more specific technical projects that demonstrate {top_skills} experience"
        )
    recommendations.append(
        "Ensure your technical skills section includes both the technologies you used "
        "and the context/projects where you applied them"
    )
    return recommendations


def _management_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    recommendations: list[str] = []
    if _mentions(analysis.key_findings.missing_skills, "leadership"):
        recommendations.append(
            "Add specific examples of team leadership, project management, "
            "and stakeholder communication achievements"
        )
    recommendations.append(
        "Quantify your management impact with team sizes, budget responsibilities, and measurable outcomes"
    )
    return recommendations


def _design_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    recommendations = [
        "Include a portfolio link and mention specific design tools, methodologies, and user research experience"
    ]
    if analysis.overall_score < 75:
        recommendations.append(
            "Highlight user-centered design processes and measurable improvements to user experience"
        )
    return recommendations


def _marketing_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    recommendations = [
        "Include specific metrics for campaigns, growth rates, and ROI to demonstrate marketing impact"
    ]
    if not any("project" in section.name.lower() for section in analysis.sections):
        recommendations.append(
            "Add a projects section showcasing successful marketing campaigns and their measurable results"
        )
    return recommendations


def _sales_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    return [
        "Quantify sales achievements with specific numbers, percentages, and quota attainment records",
        "Highlight relationship-building skills and experience with CRM systems and sales processes",
    ]


def _analysis_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    recommendations = [
        "Emphasize analytical methodologies, data sources, and business impact of your analytical work"
    ]
    if _mentions(analysis.key_findings.missing_skills, "sql"):
        recommendations.append(
            "Consider adding SQL, Excel, or other data analysis tools to strengthen your technical profile"
        )
    return recommendations


CATEGORY_RULES: dict[str, RecommendationRule] = {
    "technology": _technology_recommendations,
    "management": _management_recommendations,
    "design": _design_recommendations,
    "marketing": _marketing_recommendations,
    "sales": _sales_recommendations,
    "analysis": _analysis_recommendations,
}


def generate_role_recommendations(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    rule = CATEGORY_RULES.get(role.category.lower())
    if rule is None:
        return []
    unique = list(dict.fromkeys(rule(role, analysis)))
    return unique[:MAX_ROLE_RECOMMENDATIONS]


def _skills_feedback_text(analysis: ResumeAnalysis) -> str:
    # only the first section named like "skills" is inspected
    for section in analysis.sections:
        if "skill" in section.name.lower():
            return " ".join(section.feedback).lower()
    return ""


def find_missing_role_skills(role: JobRole, analysis: ResumeAnalysis) -> list[str]:
    skills_text = _skills_feedback_text(analysis)
    already_missing = analysis.key_findings.missing_skills
    missing: list[str] = []
    for skill in role.common_skills:
        lowered = skill.lower()
        if lowered in skills_text:
            continue
        if _mentions(already_missing, lowered):
            continue
        if skill in already_missing or skill in missing:
            continue
        missing.append(skill)
    return missing


def enrich_with_role_insights(
    analysis: ResumeAnalysis,
    job_role: str,
    catalog: RoleCatalogProvider | None = None,
) -> ResumeAnalysis:
    """Append catalog-driven missing skills and recommendations for known roles.

    Only appends; scores and existing findings are left untouched. Unknown
    roles return the analysis unchanged.
    """
    role_catalog = catalog or get_default_role_catalog()
    role = role_catalog.find_role(job_role)
    if role is None:
        return analysis

    missing = find_missing_role_skills(role, analysis)
    analysis.key_findings.missing_skills.extend(missing)

    existing = set(analysis.job_alignment.recommendations)
    added = [item for item in generate_role_recommendations(role, analysis) if item not in existing]
    analysis.job_alignment.recommendations.extend(added)

    logger.debug(
        "role_insights_applied role=%s missing_skills=%s recommendations=%s",
        role.id,
        len(missing),
        len(added),
    )
    return analysis
