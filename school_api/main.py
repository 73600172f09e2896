import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_api.api import schemas
from school_api.api.routes import router
from school_api.core.config import get_settings
from school_api.core.errors import StoreError, ValidationFailed
from school_api.services.store import create_pool, init_schema


"""FastAPI application entrypoint.
Provides the ASGI app instance, the database pool lifecycle, request logging
and the centralized error responders.
"""

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("school_api.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the pool and make sure the schools table exists before serving. - lifespan"""
    settings = get_settings()
    app.state.pool = await create_pool(settings)
    try:
        await init_schema(app.state.pool)
        yield
    finally:
        await app.state.pool.close()
        logger.info("Database pool closed")


app = FastAPI(title="School API", lifespan=lifespan)
app.include_router(router, prefix="/api")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Access log line per request: method, path, status, duration. - log_requests

    Unexpected errors are answered here rather than by the server error
    middleware, so they are logged and still pass through CORS.
    """
    start = time.perf_counter()
    status_code = 500
    try:
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_error_handler(request, exc)
        status_code = response.status_code
        return response
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        access_logger.info("%s %s %s %.1f ms", request.method, request.url.path, status_code, elapsed_ms)


# outermost middleware: 500s answered by log_requests still get CORS headers
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


# Simple root
@app.get("/", tags=["root"], response_model=schemas.Status)
async def root():
    """Root health endpoint. - health"""
    return {"ok": True, "message": "School API is running"}


@app.exception_handler(ValidationFailed)
async def validation_failed_handler(request: Request, exc: ValidationFailed):
    """Rule failures become a 400 listing every failing field. - validation_failed_handler"""
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": exc.details})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies get the same 400 shape as rule failures. - request_validation_handler"""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # json_invalid errors carry a character offset instead of a field name
        if err.get("type") == "json_invalid" or len(loc) < 2:
            field = "body"
        else:
            field = loc[-1]
        details.append({"field": field, "msg": err.get("msg", "Invalid value")})
    return JSONResponse(status_code=400, content={"error": "Validation failed", "details": details})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    """Store failures are logged and reported as 500 with the driver message. - store_error_handler"""
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths, and known paths with an unsupported method, are both 404. - http_error_handler"""
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not found"})
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Anything else is logged and reported as 500. - unhandled_error_handler"""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal Server Error"})
