# showlog/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from showlog.api.v1.api import api_router
from showlog.core.config import settings
from showlog.core.exceptions import ShowlogError
from showlog.core.limiter import limiter

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Showlog API starting up (env={settings.ENV}, media={settings.MEDIA_BACKEND})")
    yield
    logger.info("Showlog API shutting down")


app = FastAPI(
    title="Showlog API",
    version="1.0.0",
    description="""
        A personal log of concerts and venues.

        ## Features

        * **Concerts & Venues**: Browse, search, create, edit and delete
        * **Import / Export**: Transactional bulk import and a re-importable export
        * **Media**: Photo and video uploads named after the show
        * **Stats**: Totals, top artists and venues, shows per year and city

        ## Authentication

        Write endpoints require a JWT from `POST /api/login` via the
        `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ShowlogError)
async def showlog_error_handler(request: Request, exc: ShowlogError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


HTTP_ERROR_KINDS = {
    400: "bad_request",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    429: "rate_limited",
}


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": HTTP_ERROR_KINDS.get(exc.status_code, "http_error"),
            "message": exc.detail,
        },
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    fields = [".".join(str(part) for part in e["loc"]) for e in errors]
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "error": "validation_error",
            "message": f"{fields[0]}: {message}" if fields else message,
            "details": {"fields": fields},
        },
    )


app.include_router(api_router, prefix="/api")

# Uploaded media is served straight from disk when stored locally
if settings.MEDIA_BACKEND == "local":
    os.makedirs(settings.MEDIA_ROOT, exist_ok=True)
    app.mount(
        settings.MEDIA_URL_PREFIX,
        StaticFiles(directory=settings.MEDIA_ROOT, check_dir=False),
        name="media",
    )


@app.get("/")
def read_root():
    return {"status": "Showlog API is running"}
