from contextlib import asynccontextmanager
import logging

from app.core.config.scoring import get_scoring_config
from app.services.scoring_llm import scoring_llm_enabled
from app.taxonomy import get_default_role_catalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    catalog = get_default_role_catalog()
    get_scoring_config()
    logger.info(
        "startup_ready roles=%s scoring_service=%s",
        len(catalog.roles()),
        "configured" if scoring_llm_enabled() else "unconfigured",
    )
    yield
