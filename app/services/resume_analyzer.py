from __future__ import annotations

import logging
import time

from app.core.config import settings
from app.core.errors import ResumeReviewError
from app.features.quick_score import generate_quick_score
from app.features.role_insights import enrich_with_role_insights
from app.normalize.analysis import normalize_analysis
from app.schemas.analysis import ResumeAnalysis
from app.schemas.resume import AnalysisResponse, AnalyzeResumeRequest, ResumeInput
from app.services.analysis_prompt import RESUME_ANALYSIS_SYSTEM_PROMPT, build_resume_analysis_prompt
from app.services.document_service import decode_document_payload, extract_resume_text
from app.services.scoring_llm import RawAnalysisPayload, json_completion
from app.taxonomy import RoleCatalogProvider

logger = logging.getLogger(__name__)

INCOMPLETE_RESUME_MESSAGE = (
    "Resume content appears to be incomplete or improperly formatted. Please ensure your resume "
    "includes contact information, experience, and skills sections."
)


def _validate_analysis_inputs(resume_text: str, job_role: str) -> None:
    if not resume_text or len(resume_text.strip()) < settings.min_resume_chars:
        raise ResumeReviewError(
            "Resume content is too short. Please provide a complete resume with at least "
            f"{settings.min_resume_chars} characters.",
            code="invalid_input",
        )
    if not job_role or not job_role.strip():
        raise ResumeReviewError("Job role is required for targeted analysis.", code="invalid_input")


def request_analysis(
    resume_text: str,
    job_role: str,
    job_description: str | None = None,
) -> RawAnalysisPayload:
    _validate_analysis_inputs(resume_text, job_role)
    prompt = build_resume_analysis_prompt(resume_text, job_role, job_description)
    return json_completion(system_prompt=RESUME_ANALYSIS_SYSTEM_PROMPT, user_prompt=prompt)


def check_quick_score(resume_text: str) -> int:
    score = generate_quick_score(resume_text)
    if score < settings.min_quick_score:
        raise ResumeReviewError(INCOMPLETE_RESUME_MESSAGE, code="invalid_input")
    return score


def _looks_like_unparsed_pdf(resume: ResumeInput) -> bool:
    return resume.type == "pdf" and len(resume.content) > 1000 and "\n" not in resume.content


def resolve_resume_content(resume: ResumeInput) -> str:
    """Return plain resume text, extracting it when a PDF payload was sent unparsed."""
    content = resume.content.strip()
    if not _looks_like_unparsed_pdf(resume):
        return content
    try:
        extraction = extract_resume_text(decode_document_payload(resume.content), resume.filename)
    except ResumeReviewError as exc:
        logger.info("inline_pdf_decode_failed file=%s: %s", resume.filename or "-", exc)
        return content
    if not extraction.ok or not extraction.text:
        logger.info("inline_pdf_extract_failed file=%s kind=%s", resume.filename or "-", extraction.error_kind)
        return content
    return extraction.text


def run_analysis(
    resume_text: str,
    job_role: str,
    job_description: str | None = None,
    *,
    catalog: RoleCatalogProvider | None = None,
) -> ResumeAnalysis:
    payload = request_analysis(resume_text, job_role, job_description)
    if not payload.structured:
        logger.warning("scoring_payload_unstructured type=%s", type(payload.data).__name__)
    analysis = normalize_analysis(payload.data)
    return enrich_with_role_insights(analysis, job_role, catalog)


def analyze_resume(
    request: AnalyzeResumeRequest,
    *,
    catalog: RoleCatalogProvider | None = None,
) -> AnalysisResponse:
    started = time.perf_counter()

    if request.resume is None or not request.resume.content:
        raise ResumeReviewError("Resume content is required.", code="invalid_input")
    job_role = (request.job_role or "").strip()
    if not job_role:
        raise ResumeReviewError("Job role is required.", code="invalid_input")

    resume_text = resolve_resume_content(request.resume)
    _validate_analysis_inputs(resume_text, job_role)
    quick_score = check_quick_score(resume_text)

    job_description = (request.job_description or "").strip() or None
    logger.info(
        "resume_analysis_started role=%s quick_score=%s has_description=%s",
        job_role,
        quick_score,
        job_description is not None,
    )
    analysis = run_analysis(resume_text, job_role, job_description, catalog=catalog)

    elapsed_ms = int((time.perf_counter() - started) * 1000)
    logger.info(
        "resume_analysis_completed role=%s overall_score=%s elapsed_ms=%s",
        job_role,
        analysis.overall_score,
        elapsed_ms,
    )
    return AnalysisResponse(success=True, analysis=analysis, processing_time=elapsed_ms)
