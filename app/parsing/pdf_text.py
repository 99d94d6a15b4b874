from __future__ import annotations

from io import BytesIO
import logging

from pypdf import PdfReader
from pypdf.errors import DependencyError, PdfReadError, PyPdfError

from .models import ExtractionResult

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024
TEXT_EXTENSIONS = {"txt", "md"}

_INVALID_PDF_MESSAGE = "PDF file appears to be corrupted or invalid. Please try uploading a different file."


def _extension(filename: str | None) -> str:
    name = (filename or "").strip()
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def _is_probably_text_payload(content: bytes) -> bool:
    sample = content[:4096]
    if not sample or b"\x00" in sample:
        return False
    printable = 0
    for byte in sample:
        if byte in (9, 10, 13) or 32 <= byte <= 126 or byte >= 128:
            printable += 1
    return (printable / len(sample)) >= 0.75


def _check_buffer(content: bytes, filename: str | None, max_bytes: int) -> ExtractionResult | None:
    if not content:
        return ExtractionResult.failure("unsupported", "No file content received.", filename=filename)
    if len(content) > max_bytes:
        size_mb = len(content) / (1024 * 1024)
        limit_mb = max_bytes / (1024 * 1024)
        return ExtractionResult.failure(
            "too_large",
            f"File size ({size_mb:.2f}MB) exceeds maximum allowed size of {limit_mb:g}MB.",
            filename=filename,
        )
    return None


def _open_reader(content: bytes) -> PdfReader:
    reader = PdfReader(BytesIO(content))
    if reader.is_encrypted:
        # documents with an owner password only still open with an empty user password
        try:
            opened = reader.decrypt("")
        except (PyPdfError, DependencyError) as exc:
            raise PermissionError("password protected") from exc
        if not opened:
            raise PermissionError("password protected")
    return reader


def extract_pdf_text(
    content: bytes,
    filename: str | None = None,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> ExtractionResult:
    """Convert a PDF buffer into raw, uncleaned page text.

    Failures come back as an unsuccessful ExtractionResult rather than an
    exception so callers can turn them into a user-facing rejection.
    """
    rejected = _check_buffer(content, filename, max_bytes)
    if rejected is not None:
        return rejected

    if not content.startswith(PDF_MAGIC):
        return ExtractionResult.failure("unsupported", "File is not a valid PDF format.", filename=filename)

    try:
        reader = _open_reader(content)
        page_chunks: list[str] = []
        for page in reader.pages:
            page_text = page.extract_text() or ""
            if page_text.strip():
                page_chunks.append(page_text)
        page_count = len(reader.pages)
    except PermissionError:
        return ExtractionResult.failure(
            "unsupported",
            "Password-protected PDFs are not supported. Please upload an unprotected PDF.",
            filename=filename,
        )
    except PdfReadError as exc:
        logger.info("pdf_parse_failed file=%s: %s", filename or "-", exc)
        return ExtractionResult.failure("unsupported", _INVALID_PDF_MESSAGE, filename=filename)
    except Exception as exc:  # noqa: BLE001 - pypdf raises assorted errors on malformed input
        logger.warning("pdf_parse_crashed file=%s: %s", filename or "-", exc)
        return ExtractionResult.failure("unsupported", _INVALID_PDF_MESSAGE, filename=filename)

    if page_count == 0:
        return ExtractionResult.failure("unsupported", _INVALID_PDF_MESSAGE, filename=filename)

    text = "\n".join(page_chunks).strip()
    if not text:
        return ExtractionResult.failure(
            "unreadable",
            "No text content found in PDF. This might be a scanned document or image-based PDF.",
            filename=filename,
        )

    return ExtractionResult(ok=True, text=text, page_count=page_count, filename=filename)


def extract_plain_text(
    content: bytes,
    filename: str | None = None,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> ExtractionResult:
    rejected = _check_buffer(content, filename, max_bytes)
    if rejected is not None:
        return rejected

    if not _is_probably_text_payload(content):
        ext = _extension(filename) or "txt"
        return ExtractionResult.failure(
            "unsupported", f"File signature does not match .{ext} text content.", filename=filename
        )

    text = ""
    for encoding in ("utf-8", "utf-16", "latin-1"):
        try:
            text = content.decode(encoding)
            break
        except UnicodeDecodeError:
            continue

    if not text.strip():
        return ExtractionResult.failure("unreadable", "No text content found in file.", filename=filename)
    return ExtractionResult(ok=True, text=text, page_count=None, filename=filename)


def extract_document_text(
    content: bytes,
    filename: str | None = None,
    *,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> ExtractionResult:
    if _extension(filename) in TEXT_EXTENSIONS:
        return extract_plain_text(content, filename, max_bytes=max_bytes)
    return extract_pdf_text(content, filename, max_bytes=max_bytes)
