from fastapi import APIRouter

from app.services.scoring_llm import scoring_llm_enabled

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "scoring_service": "configured" if scoring_llm_enabled() else "unconfigured",
        },
    }
