from __future__ import annotations

import base64
import binascii
import logging
import re

from app.core.config import settings
from app.core.errors import ResumeReviewError
from app.normalize.clean_text import clean_extracted_text
from app.parsing.models import ExtractionResult
from app.parsing.pdf_text import extract_document_text

logger = logging.getLogger(__name__)

_DATA_URI_PREFIX_RE = re.compile(r"^data:[^,]*,", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def decode_document_payload(file_data: str) -> bytes:
    """Decode a base64 document payload, with or without a data-URI prefix."""
    value = _DATA_URI_PREFIX_RE.sub("", (file_data or "").strip())
    value = _WHITESPACE_RE.sub("", value)
    if not value:
        raise ResumeReviewError("No file data provided.", code="invalid_input")
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ResumeReviewError("Invalid file data format.", code="invalid_input") from exc


def extract_resume_text(
    content: bytes,
    filename: str | None = None,
    *,
    max_bytes: int | None = None,
    min_chars: int | None = None,
) -> ExtractionResult:
    limit = max_bytes if max_bytes is not None else settings.max_upload_bytes
    minimum = min_chars if min_chars is not None else settings.min_extracted_chars

    result = extract_document_text(content, filename, max_bytes=limit)
    if not result.ok:
        logger.info("document_extraction_rejected file=%s kind=%s", filename or "-", result.error_kind)
        return result

    cleaned = clean_extracted_text(result.text or "")
    if len(cleaned) < minimum:
        logger.info("document_extraction_too_short file=%s chars=%s", filename or "-", len(cleaned))
        return ExtractionResult.failure(
            "too_short",
            "Extracted text is too short or empty. Please ensure your PDF contains readable text content.",
            filename=filename,
        )

    return result.model_copy(update={"text": cleaned})


def require_text(result: ExtractionResult) -> str:
    if result.ok and result.text:
        return result.text
    raise ResumeReviewError(
        result.error or "Unable to extract text from this document.",
        code=result.error_kind or "unreadable",
    )
