from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    database_url: str
    log_level: str = "INFO"
    environment: str = "dev"
    # CORS
    cors_allow_origins: str = "*"
    # Calendar dates and session times are evaluated in the farm's local time
    farm_timezone: str = "UTC"
    # Background loops
    scheduler_enabled: bool = True
    alert_evaluation_interval_seconds: int = Field(default=300, gt=0)
    session_check_interval_seconds: int = Field(default=60, gt=0)
    # Push (FCM)
    push_retry_attempts: int = Field(default=3, ge=1)
    push_retry_delay_seconds: float = Field(default=2.0, ge=0)
    fcm_server_key: SecretStr | None = None  # Legacy HTTP API key
    fcm_project_id: str | None = None  # For HTTP v1
    fcm_service_account_json: SecretStr | None = None  # Service Account JSON (HTTP v1)
    fcm_service_account_file: str | None = None  # Path or inline JSON (HTTP v1)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    def get_fcm_service_account_json(self) -> str | None:
        """
        Service Account JSON for FCM v1, taken from fcm_service_account_json or
        fcm_service_account_file. A file value starting with '{' is inline JSON.
        """
        if self.fcm_service_account_json:
            return self.fcm_service_account_json.get_secret_value()
        if not self.fcm_service_account_file:
            return None
        content = self.fcm_service_account_file.strip()
        if content.startswith("{"):
            return content
        try:
            return Path(content).read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not read FCM service account file %s: %s", content, exc)
            return None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
