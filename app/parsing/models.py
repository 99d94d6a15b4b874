from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.errors import ErrorKind


class ExtractionResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ok: bool
    text: str | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None
    page_count: int | None = None
    filename: str | None = None

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, *, filename: str | None = None) -> "ExtractionResult":
        return cls(ok=False, error_kind=kind, error=message, filename=filename)
