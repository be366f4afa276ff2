import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from usermanagement.core.config import get_settings
from usermanagement.core.errors import InternalError
from usermanagement.core.logging import configure_logging
from usermanagement.api.routers import (
    health,
    users,
)

settings = get_settings()
configure_logging(settings.log_level, settings.app_name)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

if settings.enable_cors:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(InternalError)
async def internal_error_handler(request: Request, exc: InternalError):
    # details were logged where the store error was translated
    logger.error("request failed", extra={"path": request.url.path, "method": request.method})
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


def _include(router):
    app.include_router(router, prefix=settings.api_prefix)

_include(health.router)
_include(users.router)

@app.get("/")
async def root():
    return {"service": settings.app_name, "status": "ok"}

@app.get("/ping", response_class=PlainTextResponse)
async def ping():
    return "pong"
