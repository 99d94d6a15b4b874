from fastapi import APIRouter

from app.schemas.analysis import JobRole
from app.taxonomy import get_default_role_catalog

router = APIRouter()


@router.get("/job-roles", response_model=list[JobRole], summary="Known job roles and their common skills")
async def list_job_roles():
    return list(get_default_role_catalog().roles())
