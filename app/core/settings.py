"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Keeps the vision endpoint, upload ceiling and telemetry tunable without code changes.
"""

from typing import List, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # <-- prevents crashes if extra env vars exist
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=8000, description="Port for FastAPI/Uvicorn")

    # CORS
    cors_allow_origins: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed origins for browser apps"
    )

    # Uploads
    max_upload_bytes: int = Field(default=10 * 1024 * 1024, description="Upload ceiling (10 MB)")

    # ---- Vision annotation service ----
    # VISION_API_KEY comes from env (.env or shell)
    vision_api_key: Optional[str] = None
    vision_endpoint: str = Field(default="https://vision.googleapis.com/v1/images:annotate")
    vision_timeout_s: float = Field(default=30.0)

    # feature type -> maxResults, sent with every annotate request
    vision_features: dict[str, int] = {
        "LABEL_DETECTION": 15,
        "OBJECT_LOCALIZATION": 10,
        "IMAGE_PROPERTIES": 5,
        "TEXT_DETECTION": 10,
        "FACE_DETECTION": 5,
        "LANDMARK_DETECTION": 5,
        "LOGO_DETECTION": 5,
        "WEB_DETECTION": 5,
    }

    # ---- Error tracking / logging ----
    sentry_dsn: Optional[str] = None
    app_env: str = Field(default="development")
    app_id: Optional[str] = None
    log_level: str = Field(default="INFO")

settings = Settings()
