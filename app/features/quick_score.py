from __future__ import annotations

import re
from functools import lru_cache

from app.core.config.scoring import get_scoring_value

_PHONE_RE = re.compile(r"\d{3}[-. ]?\d{3}[-. ]?\d{4}")


def _markers(path: str) -> tuple[str, ...]:
    raw = get_scoring_value(path, []) or []
    return tuple(str(item).lower() for item in raw)


def _points(path: str, default: int = 0) -> int:
    try:
        return int(get_scoring_value(path, default))
    except (TypeError, ValueError):
        return default


@lru_cache(maxsize=1)
def _technical_terms_re() -> re.Pattern[str] | None:
    terms = _markers("quick_score.skills.technical_terms")
    if not terms:
        return None
    alternation = "|".join(re.escape(term) for term in terms)
    return re.compile(rf"\b(?:{alternation})\b")


def _contains_any(content: str, markers: tuple[str, ...]) -> bool:
    return any(marker in content for marker in markers)


def generate_quick_score(resume_content: str) -> int:
    """Score resume text 0-100 from cheap signals, without any external call.

    Used as a gate so obviously incomplete input never reaches the scoring
    service.
    """
    if not resume_content or not isinstance(resume_content, str):
        return 0

    score = 0
    content = resume_content.lower()

    # Length
    word_count = len(resume_content.split())
    length_points = _points("quick_score.word_count.points", 10)
    for threshold in get_scoring_value("quick_score.word_count.thresholds", []) or []:
        if word_count > int(threshold):
            score += length_points

    # Contact information
    if _contains_any(content, _markers("quick_score.contact.email_markers")):
        score += _points("quick_score.contact.email_points", 10)
    if _PHONE_RE.search(content):
        score += _points("quick_score.contact.phone_points", 10)

    # Experience indicators
    experience_hits = sum(1 for keyword in _markers("quick_score.experience.keywords") if keyword in content)
    score += min(
        _points("quick_score.experience.max_points", 15),
        experience_hits * _points("quick_score.experience.points_per_keyword", 2),
    )

    # Education
    if _contains_any(content, _markers("quick_score.education.institution_markers")):
        score += _points("quick_score.education.institution_points", 5)
    if _contains_any(content, _markers("quick_score.education.degree_markers")):
        score += _points("quick_score.education.degree_points", 5)

    # Skills
    if _contains_any(content, _markers("quick_score.skills.section_markers")):
        score += _points("quick_score.skills.section_points", 5)
    terms_re = _technical_terms_re()
    if terms_re is not None:
        score += min(_points("quick_score.skills.max_term_points", 5), len(terms_re.findall(content)))

    return max(0, min(_points("quick_score.max_score", 100), score))
