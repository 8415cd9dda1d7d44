# storefront/core/config.py

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _get_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _get_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _get_list(name: str, default: str) -> list[str]:
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]


class Settings:
    """
    Single application configuration, read once from the environment.
    - DB: DATABASE_URL wins, else composed from POSTGRES_*, else a SQLite file.
    - Catalog: one-time sample seed when the products table is empty.
    - Orders: optional strict status transitions.
    - Images: ImgBB-compatible upload host.
    - Logs: JSON by default.
    """

    def __init__(self) -> None:
        # ---------- Metadata ----------
        self.ENV = os.getenv("ENV", "dev")
        self.APP_NAME = os.getenv("APP_NAME", "storefront-api")
        self.APP_TITLE = os.getenv("APP_TITLE", "Storefront API")
        self.APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
        self.APP_DESCRIPTION = os.getenv(
            "APP_DESCRIPTION", "Catalog and order backend for the storefront"
        )
        self.API_PREFIX = os.getenv("API_PREFIX", "/api").rstrip("/")

        # ---------- Database ----------
        self.DATABASE_URL = os.getenv("DATABASE_URL") or self._compose_db_url()
        self.DB_ECHO = _get_bool("DB_ECHO", False)

        # ---------- Catalog / orders ----------
        self.SEED_SAMPLE_DATA = _get_bool("SEED_SAMPLE_DATA", True)
        self.ORDER_STATUS_STRICT = _get_bool("ORDER_STATUS_STRICT", False)

        # ---------- Image host ----------
        self.IMAGE_HOST_URL = os.getenv("IMAGE_HOST_URL", "https://api.imgbb.com/1/upload")
        self.IMAGE_HOST_API_KEY = os.getenv("IMAGE_HOST_API_KEY", "")
        self.IMAGE_HOST_TIMEOUT = _get_float("IMAGE_HOST_TIMEOUT", 10.0)
        self.IMAGE_MAX_BYTES = _get_int("IMAGE_MAX_BYTES", 5 * 1024 * 1024)
        self.IMAGE_ALLOWED_EXTENSIONS = _get_list(
            "IMAGE_ALLOWED_EXTENSIONS", "jpg,jpeg,png,gif,webp"
        )

        # ---------- Logging ----------
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FORMAT = os.getenv("LOG_FORMAT", "json")

        # ---------- CORS ----------
        self.CORS_ALLOW_ORIGINS = _get_list("CORS_ALLOW_ORIGINS", "*")
        self.CORS_ALLOW_CREDENTIALS = _get_bool("CORS_ALLOW_CREDENTIALS", True)
        self.CORS_ALLOW_METHODS = os.getenv("CORS_ALLOW_METHODS", "*")
        self.CORS_ALLOW_HEADERS = os.getenv("CORS_ALLOW_HEADERS", "*")

    # -------- Internal helpers --------
    def _compose_db_url(self) -> str:
        pg_host = os.getenv("POSTGRES_HOST")
        pg_db = os.getenv("POSTGRES_DB")
        pg_user = os.getenv("POSTGRES_USER")
        pg_pwd = os.getenv("POSTGRES_PASSWORD", "")
        pg_port = os.getenv("POSTGRES_PORT", "5432")

        if pg_host and pg_db and pg_user:
            return f"postgresql+psycopg2://{pg_user}:{pg_pwd}@{pg_host}:{pg_port}/{pg_db}"

        sqlite_path = os.getenv("SQLITE_PATH", "data/storefront.db")
        path = Path(sqlite_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{path.as_posix()}"


settings = Settings()
