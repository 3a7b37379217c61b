"""
Application settings loaded from environment (.env).
Single source of truth with validation at import time.
"""
from pathlib import Path
from typing import List, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Validated configuration from env and .env file."""

    model_config = SettingsConfigDict(
        env_file=_project_root() / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    base_dir: Path = Path(__file__).resolve().parent.parent.parent

    # Groq (GROQ_API_KEYS = comma-separated, or GROQ_API_KEY = single key)
    groq_model: str = "llama-3.1-70b-versatile"
    assistant_name: str = "Assistant"
    groq_api_keys: List[str] = []
    groq_api_key: str = Field(default="", validation_alias="GROQ_API_KEY")

    # Ops
    rate_limit_chat: str = "30/minute"
    log_file: str = "logs/chatapp.log"

    # MySQL
    mysql_host: str = "localhost"
    mysql_port: int = 3306
    mysql_user: str = "root"
    mysql_password: str = ""
    mysql_database: str = "chatapp"

    # Sessions
    session_secret: str = "change-me-in-production"
    session_cookie_name: str = "chat.sid"
    session_cookie_secure: bool = False
    session_expire_minutes: int = Field(default=10080, ge=1)  # 7 days
    session_store: Literal["memory", "mysql"] = "memory"

    @property
    def database_dir(self) -> Path:
        return self.base_dir / "database"

    @property
    def chats_data_dir(self) -> Path:
        return self.database_dir / "chats_data"

    @field_validator("groq_api_keys", mode="before")
    @classmethod
    def parse_comma_list(cls, v: object) -> List[str]:
        if isinstance(v, list):
            return [x.strip() for x in v if isinstance(x, str) and x.strip()]
        if isinstance(v, str):
            return [k.strip() for k in v.split(",") if k.strip()]
        return []

    @model_validator(mode="after")
    def groq_fallback_single_key(self) -> "Settings":
        """If groq_api_keys is empty, use groq_api_key (GROQ_API_KEY from .env)."""
        if not self.groq_api_keys and self.groq_api_key:
            object.__setattr__(self, "groq_api_keys", [self.groq_api_key.strip()])
        return self


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return singleton settings instance. Validates and creates dirs on first access."""
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.chats_data_dir.mkdir(parents=True, exist_ok=True)
    return _settings
