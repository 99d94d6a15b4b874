from __future__ import annotations

import json
import re
from pathlib import Path

from app.schemas.analysis import JobRole

from .provider import RoleCatalogProvider

_WHITESPACE_RE = re.compile(r"\s+")


def role_slug(title: str) -> str:
    return _WHITESPACE_RE.sub("-", title.strip().lower())


class LocalRoleCatalog(RoleCatalogProvider):
    """Static job-role catalog, read once and never mutated afterwards."""

    def __init__(self, roles_path: str | Path | None = None) -> None:
        path = Path(roles_path) if roles_path else Path(__file__).with_name("job_roles.json")
        self._roles = self._load_roles(path)

    @staticmethod
    def _load_roles(path: Path) -> tuple[JobRole, ...]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, list):
            raise RuntimeError(f"Invalid role catalog '{path}': expected a top-level list.")
        return tuple(JobRole.model_validate(item) for item in raw)

    def roles(self) -> tuple[JobRole, ...]:
        return self._roles

    def find_role(self, job_role: str) -> JobRole | None:
        if not job_role or not job_role.strip():
            return None
        title = job_role.strip().lower()
        slug = role_slug(job_role)
        for role in self._roles:
            if role.title.lower() == title or role.id == slug:
                return role
        return None
