"""
Campus Market Backend: Application Configuration
==================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Values come from environment variables (or a .env file), are coerced
       and range-checked on startup, and are exposed through the `settings`
       singleton.
Who:   Imported by every module that needs a path, a limit or a flag.

Path settings are read when they are used, not cached by the services, so
tests can point `settings.data_dir` at a temporary directory.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every setting has a development default; the JSON documents and uploads
    land next to the working directory unless DATA_DIR / UPLOAD_DIR say
    otherwise.
    """

    app_name: str = Field(default="Campus Market API")

    # ── Data Files ────────────────────────────────────────────────────────
    # Directory holding announcements.json, discounts.json, polls.json, hours.json
    data_dir: str = Field(default="./data")

    # Spreadsheet export the scoreboard is ranked from.
    # Defaults to <data_dir>/scores.json when unset.
    scores_path: Optional[str] = Field(default=None)

    # Column names as they appear in the exported sheet: the first column
    # carries the customer number, the unnamed second one the points total.
    scores_id_column: str = Field(default="21 nisan 06 mayıs harcama ve puan")
    scores_value_column: str = Field(default="__EMPTY")

    # ── Uploads ───────────────────────────────────────────────────────────
    upload_dir: str = Field(default="./uploads")

    # 5 MiB = 5 * 1024 * 1024
    max_upload_size: int = Field(default=5_242_880, ge=1024, le=52_428_800)

    # ── Concurrency ───────────────────────────────────────────────────────
    # Serialize read-modify-write cycles per resource with an asyncio.Lock.
    # False restores plain last-writer-wins behavior.
    serialize_writes: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin.
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir)

    @property
    def scores_file(self) -> Path:
        """Resolved location of the score export."""
        if self.scores_path:
            return Path(self.scores_path)
        return self.data_path / "scores.json"

    @property
    def upload_path(self) -> Path:
        return Path(self.upload_dir)


# Singleton instance, imported throughout the application
settings = Settings()
