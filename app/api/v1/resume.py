import asyncio

from fastapi import APIRouter, File, Header, Request, UploadFile

from app.core.config import settings
from app.core.errors import ResumeReviewError
from app.core.rate_limit import rate_limit
from app.core.security import check_api_key
from app.features.quick_score import generate_quick_score
from app.parsing.sections import split_resume_sections
from app.schemas.resume import (
    AnalysisResponse,
    AnalyzeResumeRequest,
    ParsePdfMetadata,
    ParsePdfRequest,
    ParsePdfResponse,
    QuickScoreRequest,
    QuickScoreResponse,
)
from app.services.document_service import decode_document_payload, extract_resume_text, require_text
from app.services.resume_analyzer import analyze_resume
from app.services.scoring_llm import scoring_llm_enabled

router = APIRouter()

UPLOAD_CHUNK_BYTES = 64 * 1024


def _parse_response(content: bytes, filename: str | None) -> ParsePdfResponse:
    result = extract_resume_text(content, filename)
    text = require_text(result)
    return ParsePdfResponse(
        text=text,
        filename=filename or "resume.pdf",
        metadata=ParsePdfMetadata(pages=result.page_count),
        sections=split_resume_sections(text),
    )


@router.post("/parse-pdf", response_model=ParsePdfResponse)
async def parse_pdf(
    payload: ParsePdfRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    content = decode_document_payload(payload.file_data)
    return _parse_response(content, payload.filename)


@router.post("/extract-text", response_model=ParsePdfResponse)
async def extract_text(
    file: UploadFile = File(...),
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    check_api_key(x_api_key)
    filename = file.filename or "resume.pdf"

    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise ResumeReviewError(
                f"File too large. Maximum allowed size is {settings.max_upload_mb} MB.",
                code="too_large",
            )
        chunks.append(chunk)

    return _parse_response(b"".join(chunks), filename)


@router.post("/quick-score", response_model=QuickScoreResponse)
async def quick_score(payload: QuickScoreRequest):
    score = generate_quick_score(payload.resume_text)
    return QuickScoreResponse(
        score=score,
        minimum_score=settings.min_quick_score,
        passes=score >= settings.min_quick_score,
    )


@router.post("/analyze-resume", response_model=AnalysisResponse, response_model_exclude_none=True)
@rate_limit()
async def analyze_resume_endpoint(
    request: Request,
    payload: AnalyzeResumeRequest,
    x_api_key: str | None = Header(default=None, alias="X-API-Key"),
):
    _ = request
    check_api_key(x_api_key)
    if not scoring_llm_enabled():
        raise ResumeReviewError(
            "AI analysis service is not configured. Please contact the administrator.",
            code="service_unavailable",
        )

    try:
        return await asyncio.wait_for(
            asyncio.to_thread(analyze_resume, payload),
            timeout=settings.analysis_timeout_s,
        )
    except asyncio.TimeoutError as exc:
        raise ResumeReviewError("Resume analysis exceeded the time limit.", code="timeout") from exc
