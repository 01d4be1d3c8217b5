# File: medialib/core/config/settings.py

import os
from pathlib import Path


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    # --- Paths ---
    # medialib/core/config/settings.py -> medialib/core/config -> medialib/core -> medialib -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # --- Upload Tree ---
    UPLOADS_DIR: Path = Path(os.getenv("UPLOADS_DIR", str(DATA_DIR / "uploads")))
    UPLOADS_BASE_URL: str = os.getenv("UPLOADS_BASE_URL", "http://localhost/uploads")
    # When disabled, everything lives directly under UPLOADS_DIR (no YYYY/MM buckets)
    UPLOADS_USE_YEARMONTH_FOLDERS: bool = _env_flag("UPLOADS_USE_YEARMONTH_FOLDERS", "true")
    SITE_TIMEZONE: str = os.getenv("SITE_TIMEZONE", "UTC")

    # --- Database ---
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "medialib_db")

    @property
    def DATABASE_URL(self) -> str:
        explicit = os.getenv("DATABASE_URL")
        if explicit:
            return explicit

        if _env_flag("USE_SQLITE", "false"):
            return f"sqlite:///{self.DATA_DIR / 'medialib.db'}"

        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # --- Scan Triggers ---
    SECRET_KEY: str = os.getenv("SECRET_KEY", "medialib-dev-secret")
    TOKEN_LIFETIME_SECONDS: int = int(os.getenv("TOKEN_LIFETIME_SECONDS", "86400"))
    AUTO_SCAN_ENABLED: bool = _env_flag("AUTO_SCAN_ENABLED", "true")
    NOTICE_TTL_SECONDS: int = int(os.getenv("NOTICE_TTL_SECONDS", "60"))

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    def ensure_dirs(self):
        """Creates necessary data directories if they don't exist."""
        self.DATA_DIR.mkdir(parents=True, exist_ok=True)
        self.UPLOADS_DIR.mkdir(parents=True, exist_ok=True)


settings = Settings()
