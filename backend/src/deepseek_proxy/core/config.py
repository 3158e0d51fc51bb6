from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .cors import parse_allowed_origins


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )
    env: str = Field("development", alias="ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    allowed_origins_raw: str | None = Field(None, alias="ALLOWED_ORIGINS")

    # Server
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8787, alias="PORT")
    rest_path: str = Field("/api/chat", alias="REST_PATH")
    graphql_path: str = Field("/chat", alias="GRAPHQL_PATH")

    # DeepSeek upstream
    deepseek_api_key: str | None = Field(None, alias="DEEPSEEK_API_KEY")
    deepseek_base_url: str = Field("https://api.deepseek.com", alias="DEEPSEEK_BASE_URL")
    # Seconds per upstream call; None disables the timeout
    deepseek_timeout_s: float | None = Field(90.0, alias="DEEPSEEK_TIMEOUT_S")

    @field_validator("rest_path", "graphql_path", mode="before")
    @classmethod
    def _validate_path(cls, v: str | None) -> str:
        val = (v or "").strip()
        if not val.startswith("/"):
            raise ValueError(f"route paths must start with '/'; got: {v!r}")
        return val

    @property
    def allowed_origins(self) -> List[str]:
        return parse_allowed_origins(self.allowed_origins_raw)


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]
