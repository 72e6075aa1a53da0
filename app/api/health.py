# Common language: Environment/ops probe that surfaces version pins and configuration status.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter
from ..core.settings import settings
from ..core.telemetry import telemetry_enabled
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except Exception:
        return "not-installed"

@router.get("/healthz")
def healthz():
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic": _ver("pydantic"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "PIL": _ver("PIL"),
            "sentry_sdk": _ver("sentry_sdk"),
        },
        "config": {
            "app_env": settings.app_env,
            "vision_endpoint": settings.vision_endpoint,
            "vision_features": list(settings.vision_features),
            "max_upload_bytes": settings.max_upload_bytes,
        },
        "env_keys_present": {
            "VISION_API_KEY": bool(settings.vision_api_key),
            "SENTRY_DSN": bool(settings.sentry_dsn),
        },
        "error_tracking": telemetry_enabled(),
    }
