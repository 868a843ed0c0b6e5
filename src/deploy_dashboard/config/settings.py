from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseModel):
    """Logging configuration settings."""
    level: str = "INFO"
    file: Optional[str] = None
    console: bool = True
    json_format: Optional[bool] = None  # Auto-detect based on NODE_ENV


class Settings(BaseSettings):
    """
    Ambient service settings, loaded from environment variables and a .env file.

    PORT, NODE_ENV and HOST are not declared here: the ConfigurationManager
    owns them so it can snapshot and check them.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    APP_NAME: str = "Deploy Dashboard"
    APP_VERSION: str = "0.1.0"

    # --- Metadata sources ---
    PROJECT_ROOT: Path = Field(default_factory=Path.cwd)
    DEPLOYMENT_STATUS_FILE: Optional[Path] = None
    GIT_TIMEOUT_SECONDS: float = 5.0

    # --- Startup behaviour ---
    FAIL_ON_INVALID_CONFIG: bool = Field(
        default=False,
        description="Refuse to start when the managed configuration is invalid",
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def deployment_status_path(self) -> Path:
        if self.DEPLOYMENT_STATUS_FILE is None:
            return self.PROJECT_ROOT / "deployment-status.json"
        if self.DEPLOYMENT_STATUS_FILE.is_absolute():
            return self.DEPLOYMENT_STATUS_FILE
        return self.PROJECT_ROOT / self.DEPLOYMENT_STATUS_FILE


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns a cached instance of the application settings.
    """
    return Settings()
