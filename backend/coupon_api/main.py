import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from coupon_api.core.config import settings
from coupon_api.core.database import init_db
from coupon_api.core.exceptions import StorageError
from coupon_api.core.logging_config import configure_logging
from coupon_api.routers import coupons
from coupon_api.schemas.response import fail

configure_logging()
logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Coupons", "description": "Create, read, update, and delete discount coupons."},
]


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    if not settings.use_memory_store:
        init_db()
    logger.info("%s %s started (store=%s)", settings.APP_NAME, settings.version, settings.COUPON_STORE)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description="Manage percentage discount coupons.",
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    envelope = fail("A storage error occurred", status_code=500)
    return JSONResponse(status_code=500, content=envelope.to_content())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for error in exc.errors():
        loc = error.get("loc") or ("request",)
        # Malformed JSON reports a character offset instead of a field name
        field = "body" if isinstance(loc[-1], int) else str(loc[-1])
        messages.append(f"'{field.capitalize()}' {error['msg']}")
    logger.warning("%s %s rejected: %s", request.method, request.url.path, messages)
    envelope = fail(*messages, status_code=400)
    return JSONResponse(status_code=400, content=envelope.to_content())


app.include_router(coupons.router, prefix="/api/coupon", tags=["Coupons"])


@app.get("/hello", response_class=PlainTextResponse, include_in_schema=False)
async def hello() -> str:
    return "HELLO"


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
