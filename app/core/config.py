import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/app.db")).resolve()
        seed_path = os.getenv("PRODUCT_SEED_PATH")
        self.product_seed_path: Optional[Path] = Path(seed_path).resolve() if seed_path else None
        self.log_level = self._get_log_level("LOG_LEVEL", default="INFO")
        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @staticmethod
    def _get_log_level(key: str, default: str) -> str:
        value = os.getenv(key, default).strip().upper()
        if value not in _LOG_LEVELS:
            raise RuntimeError(
                f"Environment variable {key} must be one of {', '.join(_LOG_LEVELS)}"
            )
        return value
