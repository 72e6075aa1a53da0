"""
Purpose:
- FastAPI application factory and router mounts.
- Sets up logging and Sentry error tracking once per app.
- Adds CORS for local dev frontends.
- Uvicorn will serve this on 0.0.0.0:8000 by default.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.settings import settings
from .core.logging_config import setup_logging
from .core.telemetry import init_telemetry
from .api.health import router as health_router
from .api.analyze import router as analyze_router

async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # same {"error": ...} shape the upload route uses
    message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=getattr(exc, "headers", None))

async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    # a plain form field named "image" is not an upload
    if any(tuple(e.get("loc", ()))[:2] == ("body", "image") for e in errors):
        return JSONResponse(status_code=400, content={"error": "No image file provided"})
    first = errors[0] if errors else {}
    where = ".".join(str(p) for p in first.get("loc", ()))
    message = f"{where}: {first.get('msg', 'invalid request')}" if where else first.get("msg", "Invalid request")
    return JSONResponse(status_code=422, content={"error": message})

def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    init_telemetry(settings.sentry_dsn, settings.app_env, settings.app_id)

    app = FastAPI(title="Image Description API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.include_router(health_router)
    app.include_router(analyze_router)
    return app

app = create_app()
