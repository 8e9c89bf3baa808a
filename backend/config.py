"""
AutoTrack - System Configuration
Version: 1.1.0

Changelog:
v1.1.0 (2026-10-12): R2 image storage settings, optional images/ key prefix
v1.0.0 (2026-09-28): Initial configuration module
"""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path
import os


class Settings(BaseSettings):
    """System-wide configuration"""

    # Application
    APP_NAME: str = "AutoTrack API"
    APP_VERSION: str = "1.2.0"
    DEBUG: bool = False

    # API Server
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_WORKERS: int = 1
    CORS_ORIGINS: List[str] = ["*"]

    # SQLite Configuration
    SQLITE_DB_PATH: str = str(Path(__file__).parent / "data" / "autotrack.db")

    # Firebase Authentication
    FIREBASE_PROJECT_ID: str = ""  # Set via environment variable
    FIREBASE_JWKS_URL: str = (
        "https://www.googleapis.com/service_accounts/v1/jwk/"
        "securetoken@system.gserviceaccount.com"
    )
    FIREBASE_JWKS_TIMEOUT: float = 5.0  # seconds

    # Object Storage (Cloudflare R2, S3-compatible)
    R2_ENDPOINT_URL: str = ""
    R2_ACCESS_KEY_ID: str = ""
    R2_SECRET_ACCESS_KEY: str = ""
    R2_BUCKET_NAME: str = "autotrack"
    IMAGE_PUBLIC_BASE_URL: str = "https://r2.autotrack.work"
    IMAGE_KEY_PREFIX: str = ""  # e.g. "images/"

    # File Paths
    LOGS_DIR: str = str(Path(__file__).parent / "logs")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Singleton instance
settings = Settings()


def get_settings() -> Settings:
    """FastAPI dependency returning the active settings"""
    return settings


def storage_configured(cfg: Settings) -> bool:
    """True when every credential needed for R2 uploads is present"""
    return all([
        cfg.R2_ENDPOINT_URL,
        cfg.R2_ACCESS_KEY_ID,
        cfg.R2_SECRET_ACCESS_KEY,
        cfg.R2_BUCKET_NAME,
    ])


def init_directories():
    """Create necessary directories"""
    for directory in [settings.LOGS_DIR, os.path.dirname(os.path.abspath(settings.SQLITE_DB_PATH))]:
        os.makedirs(directory, exist_ok=True)
