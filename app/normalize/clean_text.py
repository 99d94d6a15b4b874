from __future__ import annotations

import re
from typing import Any

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]{2,}")
_NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E\n]")
_PAGE_NUMBER_LINE_RE = re.compile(r"[\d\s]*")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z])(?=[A-Z])")
_LETTER_DIGIT_RE = re.compile(r"(?<=[A-Za-z])(?=\d)")
_DIGIT_LETTER_RE = re.compile(r"(?<=\d)(?=[A-Za-z])")
_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")


def _drop_page_number_lines(text: str) -> str:
    return "\n".join(
        "" if _PAGE_NUMBER_LINE_RE.fullmatch(line) else line
        for line in text.split("\n")
    )


def _split_glued_words(text: str) -> str:
    text = _CAMEL_BOUNDARY_RE.sub(" ", text)
    text = _LETTER_DIGIT_RE.sub(" ", text)
    return _DIGIT_LETTER_RE.sub(" ", text)


def clean_extracted_text(text: Any) -> str:
    """Clean raw extracted document text so it is suitable for analysis.

    Never raises; anything that is not a string yields an empty string.
    Applying it twice gives the same result as applying it once.
    """
    if not text or not isinstance(text, str):
        return ""

    cleaned = text.replace("\r\n", "\n").replace("\r", "\n")
    cleaned = _EXCESS_NEWLINES_RE.sub("\n\n", cleaned)
    cleaned = _HORIZONTAL_SPACE_RE.sub(" ", cleaned)

    # PDF artifacts: keep printable ASCII and newlines only
    cleaned = _NON_PRINTABLE_RE.sub("", cleaned)
    cleaned = _drop_page_number_lines(cleaned)

    cleaned = _split_glued_words(cleaned)

    cleaned = _PARAGRAPH_BREAK_RE.sub("\n\n", cleaned)
    # dropped characters can leave new space runs behind
    cleaned = _HORIZONTAL_SPACE_RE.sub(" ", cleaned)
    return cleaned.strip()
