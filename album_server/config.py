"""
Application configuration using Pydantic Settings.
Manages all environment variables and settings.
"""
import os
import tempfile
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent

# 패키지에 포함된 시드 데이터 (DB 스냅샷 + 업로드 파일), 읽기 전용
DEFAULT_SEED_DIR = PACKAGE_DIR / "seed"


def default_work_dir() -> Path:
    return Path(tempfile.gettempdir()) / "album-server"


class Environment(str, Enum):
    """Application environment modes."""
    DEV = "DEV"
    PRODUCTION = "PRODUCTION"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=None, case_sensitive=False)

    # Environment
    environment: Environment = Field(
        default=Environment.DEV,
        description="Application environment: DEV or PRODUCTION",
    )

    # Application
    app_name: str = Field(default="Album Server")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)

    # 저장소 경로 (빈 문자열이면 기본값 사용)
    work_dir: Path = Field(
        default_factory=default_work_dir,
        description="Writable directory holding the database file and uploads",
    )
    database_filename: str = Field(default="database.db")
    uploads_segment: str = Field(
        default="uploads",
        description="Upload directory name, also the static URL prefix",
    )
    seed_dir: Optional[Path] = Field(
        default=None,
        description="Seed data directory (database.db + uploads/). Defaults to the bundled seed",
    )

    # CORS
    cors_allow_origins: List[str] = Field(default=["*"])
    cors_allow_methods: List[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    cors_allow_headers: List[str] = Field(
        default=["Origin", "Content-Type", "Authorization"]
    )
    cors_expose_headers: List[str] = Field(default=["Content-Length"])
    cors_allow_credentials: bool = Field(default=True)

    # Observability (LOG_DIR 비어 있으면 파일 로그 비활성화)
    log_dir: Optional[Path] = Field(
        default=None,
        description="NDJSON log directory. Empty disables file logging",
    )
    metrics_enabled: bool = Field(default=True)
    slow_query_threshold: float = Field(default=1.0, description="Seconds")
    instance_ip: str = Field(default="", description="Instance identifier for logs")

    @field_validator("work_dir", mode="before")
    @classmethod
    def coerce_empty_work_dir(cls, v: object) -> object:
        if v is None or not str(v).strip():
            return default_work_dir()
        return v

    @field_validator("seed_dir", "log_dir", mode="before")
    @classmethod
    def coerce_empty_path(cls, v: object) -> object:
        if v is None or not str(v).strip():
            return None
        return v

    @field_validator("uploads_segment")
    @classmethod
    def strip_uploads_segment(cls, v: str) -> str:
        segment = v.strip("/")
        if not segment:
            raise ValueError("uploads_segment must not be empty")
        return segment

    @model_validator(mode="after")
    def set_debug_from_environment(self):
        """Set debug mode based on environment if not explicitly set via environment variable."""
        if "DEBUG" not in os.environ:
            self.debug = self.environment == Environment.DEV
        return self

    @property
    def database_path(self) -> Path:
        return self.work_dir / self.database_filename

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.database_path}"

    @property
    def uploads_dir(self) -> Path:
        return self.work_dir / self.uploads_segment

    @property
    def seed_path(self) -> Path:
        return self.seed_dir if self.seed_dir is not None else DEFAULT_SEED_DIR


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Using lru_cache to avoid reading the environment on every request.
    """
    return Settings()
