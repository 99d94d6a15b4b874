from __future__ import annotations

import re
from typing import Any

OTHER_SECTION = "other"

SECTION_HEADERS: dict[str, tuple[str, ...]] = {
    "contact": ("contact", "personal information", "contact information"),
    "summary": ("summary", "professional summary", "profile", "objective", "career objective"),
    "experience": ("experience", "work experience", "professional experience", "employment"),
    "education": ("education", "academic background", "educational background"),
    "skills": ("skills", "technical skills", "core competencies", "expertise"),
    "projects": ("projects", "personal projects", "key projects", "project experience"),
    "certifications": (
        "certification",
        "certifications",
        "license",
        "licenses",
        "professional certification",
        "professional certifications",
    ),
}


def _header_pattern(phrases: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(r"\s+".join(map(re.escape, phrase.split())) for phrase in phrases)
    return re.compile(rf"(?:{alternatives})[\s:]*", re.IGNORECASE)


_HEADER_PATTERNS = {name: _header_pattern(phrases) for name, phrases in SECTION_HEADERS.items()}


def match_section_header(line: str) -> str | None:
    """Section key when the whole line is a known header such as 'Work Experience:'."""
    candidate = line.strip()
    for name, pattern in _HEADER_PATTERNS.items():
        if pattern.fullmatch(candidate):
            return name
    return None


def split_resume_sections(text: Any) -> dict[str, str]:
    """Group the lines of cleaned resume text under the header that precedes them.

    Header lines themselves are dropped, blank lines are skipped and anything
    before the first header lands in "other". Every key is always present.
    """
    buckets: dict[str, list[str]] = {name: [] for name in SECTION_HEADERS}
    buckets[OTHER_SECTION] = []
    if not isinstance(text, str):
        return {name: "" for name in buckets}

    current = OTHER_SECTION
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        header = match_section_header(stripped)
        if header is not None:
            current = header
            continue
        buckets[current].append(stripped)

    return {name: "\n".join(lines) for name, lines in buckets.items()}
