from __future__ import annotations

from typing import Protocol

from app.schemas.analysis import JobRole


class RoleCatalogProvider(Protocol):
    def roles(self) -> tuple[JobRole, ...]:
        """Return every known role in catalog order."""

    def find_role(self, job_role: str) -> JobRole | None:
        """Return the role matching a free-form title, if any."""
