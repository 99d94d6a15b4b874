from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.errors import ErrorKind

from .analysis import ResumeAnalysis

ResumeSourceType = Literal["text", "pdf"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResumeInput(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    content: str = Field(default="", max_length=15_000_000)
    type: ResumeSourceType = "text"
    filename: str | None = Field(default=None, max_length=255)


class AnalyzeResumeRequest(_CamelModel):
    resume: ResumeInput | None = None
    job_role: str = Field(default="", max_length=200)
    job_description: str | None = Field(default=None, max_length=50000)


class AnalysisResponse(_CamelModel):
    success: bool
    analysis: ResumeAnalysis | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    processing_time: int | None = None


class ParsePdfRequest(_CamelModel):
    file_data: str = Field(default="", max_length=15_000_000)
    filename: str | None = Field(default=None, max_length=255)


class ParsePdfMetadata(_CamelModel):
    pages: int | None = None


class ParsePdfResponse(_CamelModel):
    success: bool = True
    text: str
    filename: str
    metadata: ParsePdfMetadata = Field(default_factory=ParsePdfMetadata)
    sections: dict[str, str] = Field(default_factory=dict)


class QuickScoreRequest(_CamelModel):
    resume_text: str = Field(default="", max_length=100000)


class QuickScoreResponse(_CamelModel):
    score: int = Field(ge=0, le=100)
    minimum_score: int
    passes: bool


class ErrorResponse(_CamelModel):
    success: bool = False
    error: str
    error_kind: ErrorKind | None = None
