from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Literal


class AppSettings(BaseSettings):
    APP_NAME: str = "repo-archive"
    LOG_LEVEL: str = "INFO"

    # ===== Database =====
    DATABASE_DSN: str
    DB_POOL_SIZE: int = Field(default=3, ge=1)
    DB_PING_TIMEOUT: float = 1.0
    DB_TIMEOUT: float = 5.0

    # ===== GitHub =====
    GITHUB_TOKEN: str
    GITHUB_PER_PAGE: int = Field(default=25, ge=1, le=100)
    # 0 = follow pagination to the last page
    GITHUB_MAX_PAGES: int = Field(default=0, ge=0)
    GITHUB_TIMEOUT: int = 15

    # ===== Archive run =====
    ARCHIVE_ACCOUNT: str = "permalik"
    ARCHIVE_IS_ORG: bool = False
    ARCHIVE_WRITE_MODE: Literal["rebuild", "upsert"] = "rebuild"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = AppSettings()
