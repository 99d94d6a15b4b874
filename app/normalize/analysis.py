from __future__ import annotations

import math
from typing import Any, Mapping

from app.schemas.analysis import JobAlignment, KeyFindings, ResumeAnalysis, SectionAssessment

FALLBACK_SUMMARY = "Unable to generate analysis summary."
FALLBACK_SECTION_NAME = "Section"

# Upper bounds on model output kept in an analysis; longer input is truncated.
MAX_ITEM_CHARS = 2000
MAX_SUMMARY_CHARS = 4000
MAX_SECTION_NAME_CHARS = 120
MAX_LIST_ITEMS = 50


def _pick(raw: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in raw:
        return raw[camel]
    return raw.get(snake)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _clamp_score(value: Any, max_value: int) -> int:
    """Round a loosely typed score to the nearest int inside [0, max_value].

    Anything that is not a finite number (or numeric string) counts as 0.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        value = value.strip()
    try:
        parsed = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    if not math.isfinite(parsed):
        return 0
    return max(0, min(max_value, int(round(parsed))))


def _safe_str(value: Any, max_len: int = MAX_ITEM_CHARS) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return ""
        try:
            return str(value)[:max_len]
        except ValueError:
            # ints past the interpreter's digit limit cannot be stringified
            return ""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_len]


def _safe_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = (_safe_str(item) for item in value)
    return [item for item in items if item][:MAX_LIST_ITEMS]


def _coerce_section(raw: Mapping[str, Any]) -> SectionAssessment:
    return SectionAssessment(
        name=_safe_str(raw.get("name"), max_len=MAX_SECTION_NAME_CHARS) or FALLBACK_SECTION_NAME,
        score=_clamp_score(raw.get("score"), 10),
        feedback=_safe_str_list(raw.get("feedback")),
        suggestions=_safe_str_list(raw.get("suggestions")),
        strengths=_safe_str_list(raw.get("strengths")),
        issues=_safe_str_list(raw.get("issues")),
    )


def _coerce_sections(value: Any) -> list[SectionAssessment]:
    if not isinstance(value, list):
        return []
    return [_coerce_section(item) for item in value if isinstance(item, Mapping)]


def _coerce_key_findings(value: Any) -> KeyFindings:
    raw = _as_mapping(value)
    return KeyFindings(
        strengths=_safe_str_list(raw.get("strengths")),
        major_issues=_safe_str_list(_pick(raw, "majorIssues", "major_issues")),
        missing_skills=_safe_str_list(_pick(raw, "missingSkills", "missing_skills")),
        ats_compatibility=_clamp_score(_pick(raw, "atsCompatibility", "ats_compatibility"), 10),
        improvement_priority=_safe_str_list(_pick(raw, "improvementPriority", "improvement_priority")),
    )


def _coerce_job_alignment(value: Any) -> JobAlignment:
    raw = _as_mapping(value)
    return JobAlignment(
        match_score=_clamp_score(_pick(raw, "matchScore", "match_score"), 10),
        relevant_experience=_safe_str_list(_pick(raw, "relevantExperience", "relevant_experience")),
        skill_gaps=_safe_str_list(_pick(raw, "skillGaps", "skill_gaps")),
        recommendations=_safe_str_list(raw.get("recommendations")),
    )


def normalize_analysis(raw_analysis: Any) -> ResumeAnalysis:
    """Reshape an untrusted scoring-service payload into a ResumeAnalysis.

    Total over any input: missing or wrongly typed fields fall back to
    defaults instead of raising.
    """
    raw = _as_mapping(raw_analysis)
    return ResumeAnalysis(
        overall_score=_clamp_score(_pick(raw, "overallScore", "overall_score"), 100),
        summary=_safe_str(raw.get("summary"), max_len=MAX_SUMMARY_CHARS) or FALLBACK_SUMMARY,
        sections=_coerce_sections(raw.get("sections")),
        key_findings=_coerce_key_findings(_pick(raw, "keyFindings", "key_findings")),
        job_alignment=_coerce_job_alignment(_pick(raw, "jobAlignment", "job_alignment")),
    )
