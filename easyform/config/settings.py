"""
Application settings and configuration
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "False") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Application
    APP_NAME = "EasyForm API"
    VERSION = "1.0.0"

    # Database
    MONGO_URI = os.getenv("MONGO_URI", "")
    DATABASE_NAME = os.getenv("DATABASE_NAME", "easyform")
    # Reuse one client for the whole process instead of one per request
    MONGO_CACHE_CLIENT = _env_flag("MONGO_CACHE_CLIENT")

    # Serialization
    TIMEZONE = os.getenv("TIMEZONE", "UTC")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # CORS
    ALLOWED_ORIGINS = [
        origin.strip()
        for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    ALLOWED_METHODS = ["GET", "POST", "PUT", "OPTIONS"]
    ALLOWED_HEADERS = ["Content-Type", "Authorization"]

    # Fixed list limits
    COMPANY_LIST_LIMIT = 100
    FORM_LIST_LIMIT = 200
    SUBMISSION_LIST_LIMIT = 200

    # PDF export
    PDF_FILENAME_PREFIX = "easyform"

    @property
    def mongo_uri_present(self) -> bool:
        return self.MONGO_URI.startswith("mongodb")

settings = Settings()
