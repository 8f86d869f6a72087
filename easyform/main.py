"""
Main FastAPI application
"""
import json
import logging
import time
from contextlib import asynccontextmanager

from bson.errors import InvalidId
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from easyform.config.database import db_config
from easyform.config.logging_config import setup_logging
from easyform.config.settings import settings
from easyform.routes import company, forms, submissions, submission_pdf
from easyform.utils.errors import EasyFormError, MethodNotAllowedError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown events"""
    setup_logging()
    logger.info("🚀 %s v%s started", settings.APP_NAME, settings.VERSION)
    logger.info("MONGO_URI present: %s", "yes" if settings.mongo_uri_present else "no")
    yield
    await db_config.close_db()
    logger.info("👋 Application shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=settings.ALLOWED_METHODS,
    allow_headers=settings.ALLOWED_HEADERS,
)


def _error_response(exc: EasyFormError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(EasyFormError)
async def easyform_error_handler(request: Request, exc: EasyFormError):
    if exc.status_code >= 500:
        logger.error("❌ %s %s: %s", request.method, request.url.path, exc)
    return _error_response(exc)


@app.exception_handler(PyMongoError)
@app.exception_handler(InvalidId)
async def store_error_handler(request: Request, exc: Exception):
    logger.error("❌ Mongo error (%s %s): %s", request.method, request.url.path, exc)
    return _error_response(StoreError(str(exc)))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error_response(NotFoundError(str(exc.detail)))
    if exc.status_code == 405:
        return _error_response(MethodNotAllowedError(str(exc.detail)))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "http_error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Round-trip through json with default=str to handle non-serializable objects
    safe_errors = json.loads(json.dumps(exc.errors(), default=str))
    logger.warning(
        "Invalid request body on %s %s: %s (body: %s)",
        request.method, request.url.path, safe_errors, json.dumps(exc.body, default=str),
    )
    return JSONResponse(
        status_code=400,
        content={"error": "invalid_body", "message": "request body could not be parsed", "details": safe_errors},
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error("❌ Unexpected error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(status_code=500, content={"error": "internal_error", "message": str(exc)})


# Handled inside the middleware stack so CORS headers and request logging
# still apply. A bare Exception handler would run in ServerErrorMiddleware,
# outside both, so it is kept only as the last resort.
UNEXPECTED_ERRORS = (ValueError, TypeError, LookupError, AttributeError, RuntimeError, OSError)
for error_class in UNEXPECTED_ERRORS:
    app.add_exception_handler(error_class, unexpected_error_handler)
app.add_exception_handler(Exception, unexpected_error_handler)


def _preflight_headers(request: Request) -> dict:
    origin = request.headers.get("origin")
    if "*" in settings.ALLOWED_ORIGINS:
        allow_origin = "*"
    elif origin in settings.ALLOWED_ORIGINS:
        allow_origin = origin
    else:
        allow_origin = None

    headers = {
        "Access-Control-Allow-Methods": ",".join(settings.ALLOWED_METHODS),
        "Access-Control-Allow-Headers": ", ".join(settings.ALLOWED_HEADERS),
    }
    if allow_origin:
        headers["Access-Control-Allow-Origin"] = allow_origin
    return headers


@app.middleware("http")
async def answer_preflight(request: Request, call_next):
    """Every OPTIONS request gets an empty 204"""
    if request.method == "OPTIONS":
        return Response(status_code=204, headers=_preflight_headers(request))
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.info("%s %s - %s (%.2fs)", request.method, request.url.path, response.status_code, duration)
    return response


# Include routers
app.include_router(company.router, prefix="/api")
app.include_router(forms.router, prefix="/api")
app.include_router(submissions.router, prefix="/api")
app.include_router(submission_pdf.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "app": settings.APP_NAME,
        "version": settings.VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}
