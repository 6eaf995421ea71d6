from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    llm_provider: str = Field(default="openai", validation_alias="LLM_PROVIDER")
    openai_api_key: Optional[str] = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_api_base: Optional[str] = Field(
        default=None, validation_alias="OPENAI_API_BASE"
    )
    vision_model: str = Field(default="gpt-4o-mini", validation_alias="VISION_MODEL")
    llm_temperature: float = Field(default=0.2, validation_alias="LLM_TEMPERATURE")
    llm_timeout_seconds: float = Field(
        default=60.0, gt=0, validation_alias="LLM_TIMEOUT_SECONDS"
    )
    fastapi_port: int = Field(default=8000, validation_alias="FASTAPI_PORT")
    backend_url: str = Field(
        default="http://localhost:8000", validation_alias="BACKEND_URL"
    )
    default_language: str = Field(default="en", validation_alias="DEFAULT_LANGUAGE")
    log_path: Optional[str] = Field(default=None, validation_alias="LOG_PATH")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("llm_provider", "default_language", mode="after")
    @classmethod
    def normalize_lower(cls, value: str) -> str:
        return value.lower() if value else value


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return AppConfig()
