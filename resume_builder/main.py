import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi import _rate_limit_exceeded_handler
import sentry_sdk
import uvicorn

from resume_builder.api.health import router as health_router
from resume_builder.api.resume import router as resume_router
from resume_builder.api.downloads import router as downloads_router
from resume_builder.core.cors import cors_allow_credentials, cors_allowed_origins
from resume_builder.core.errors import ResumeServiceError
from resume_builder.core.rate_limit import limiter
from resume_builder.core.config import settings
from resume_builder.core.lifespan import lifespan

logger = logging.getLogger(__name__)

logging.basicConfig(level=settings.log_level, format="%(message)s")
if settings.sentry_dsn:
    sentry_sdk.init(dsn=settings.sentry_dsn)

app = FastAPI(title="Resume Builder API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_allowed_origins(),
    allow_credentials=cors_allow_credentials(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


@app.exception_handler(ResumeServiceError)
async def resume_service_error_handler(request: Request, exc: ResumeServiceError):
    if exc.status_code >= 500:
        logger.error(
            "request_failed path=%s status=%s: %s",
            request.url.path,
            exc.status_code,
            exc,
            exc_info=exc.__cause__,
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid resume payload", "details": jsonable_encoder(exc.errors())},
    )


app.include_router(health_router, tags=["Health"])
app.include_router(resume_router, tags=["Resume"])
app.include_router(downloads_router, tags=["Downloads"])


def run() -> None:
    uvicorn.run("resume_builder.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
