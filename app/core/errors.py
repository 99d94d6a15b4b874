from __future__ import annotations

from typing import Literal

ErrorKind = Literal[
    "invalid_input",
    "too_large",
    "unsupported",
    "unreadable",
    "too_short",
    "service_unavailable",
    "rate_limited",
    "timeout",
    "malformed_response",
]

ERROR_STATUS_CODES: dict[str, int] = {
    "invalid_input": 400,
    "too_large": 413,
    "unsupported": 400,
    "unreadable": 400,
    "too_short": 400,
    "service_unavailable": 503,
    "rate_limited": 429,
    "timeout": 504,
    "malformed_response": 502,
}

# Messages shown to end users for failures of the external scoring service.
# The precise cause is only logged.
PUBLIC_SERVICE_MESSAGES: dict[str, str] = {
    "service_unavailable": "AI analysis service is temporarily unavailable. Please try again later.",
    "rate_limited": "Service is busy. Please try again in a few minutes.",
    "timeout": "The analysis took too long to complete. Please try again shortly.",
    "malformed_response": "Failed to analyze resume. Please try again.",
}


class ResumeReviewError(RuntimeError):
    def __init__(self, message: str, *, code: ErrorKind = "invalid_input"):
        super().__init__(message)
        self.code = code

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES.get(self.code, 500)

    @property
    def public_message(self) -> str:
        return PUBLIC_SERVICE_MESSAGES.get(self.code, str(self))

    @property
    def is_service_error(self) -> bool:
        return self.code in PUBLIC_SERVICE_MESSAGES
