from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from devevent.api.errors import http_error_from_service
from devevent.api.v1.router import router as v1_router
from devevent.core.config import settings
from devevent.core.logging import configure_logging
from devevent.db import get_provider, reset_provider
from devevent.middleware.request_id import RequestIdMiddleware
from devevent.middleware.security_headers import SecurityHeadersMiddleware
from devevent.services.exceptions import DatabaseConnectionError, ServiceError

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Raises ConfigurationError without DATABASE_URL, which aborts startup.
    provider = get_provider()
    if settings.create_schema_on_startup:
        provider.create_schema()
    logger.info("app_started", env=settings.env)
    yield
    reset_provider()


app = FastAPI(title="DevEvent API", lifespan=lifespan)

# Starlette runs the LAST added middleware FIRST (outermost).
# RequestId + SecurityHeaders wrap everything, CORS sits closest to the app.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestIdMiddleware)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, err: ServiceError) -> JSONResponse:
    # Errors raised outside route bodies, e.g. while opening the request session
    http_err = http_error_from_service(err)
    return JSONResponse(status_code=http_err.status_code, content={"detail": http_err.detail})


@app.get("/")
def root():
    return {"name": "DevEvent API", "status": "ok"}


@app.get("/health")
def health():
    try:
        get_provider().ping()
    except DatabaseConnectionError as err:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "code": err.code},
        )
    return {"status": "ok", "database": "ok"}


app.include_router(v1_router, prefix="/v1")
