from functools import lru_cache

from .provider import RoleCatalogProvider
from .role_catalog import LocalRoleCatalog, role_slug


@lru_cache(maxsize=1)
def get_default_role_catalog() -> RoleCatalogProvider:
    return LocalRoleCatalog()


__all__ = ["RoleCatalogProvider", "LocalRoleCatalog", "get_default_role_catalog", "role_slug"]
