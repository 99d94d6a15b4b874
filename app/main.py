import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import sentry_sdk

from app.api.v1.health import router as health_router
from app.api.v1.job_roles import router as job_roles_router
from app.api.v1.resume import router as resume_router
from app.core.config import settings
from app.core.cors import cors_allow_credentials, cors_allow_origin_regex, cors_allowed_origins
from app.core.errors import PUBLIC_SERVICE_MESSAGES, ResumeReviewError
from app.core.lifespan import lifespan
from app.core.rate_limit import limiter
from app.schemas.resume import ErrorResponse

logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger(__name__)

if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume Reviewer API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_origin_regex=cors_allow_origin_regex(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(ResumeReviewError)
async def resume_review_error_handler(request: Request, exc: ResumeReviewError) -> JSONResponse:
    if exc.is_service_error:
        logger.warning("resume_review_service_error path=%s code=%s: %s", request.url.path, exc.code, exc)
    else:
        logger.info("resume_review_rejected path=%s code=%s: %s", request.url.path, exc.code, exc)
    body = ErrorResponse(error=exc.public_message, error_kind=exc.code)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(by_alias=True))


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.info("resume_review_rate_limited path=%s limit=%s", request.url.path, exc.detail)
    body = ErrorResponse(error=PUBLIC_SERVICE_MESSAGES["rate_limited"], error_kind="rate_limited")
    response = JSONResponse(status_code=429, content=body.model_dump(by_alias=True))
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is None:
        return response
    return request.app.state.limiter._inject_headers(response, view_rate_limit)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or "request"
    logger.info("resume_review_invalid_request path=%s errors=%s", request.url.path, len(errors))
    body = ErrorResponse(error=f"Invalid {field}: {first.get('msg', 'malformed request')}", error_kind="invalid_input")
    return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))


app.include_router(health_router, prefix="/v1", tags=["Health"])
app.include_router(job_roles_router, prefix="/v1", tags=["Job Roles"])
app.include_router(resume_router, prefix="/v1", tags=["Resume"])
