from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PROMPTKITCHEN_", extra="ignore", populate_by_name=True)

    # Deployment knobs. The bare names are what hosting platforms (Render, Heroku, ...) set.
    deepseek_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("deepseek_api_key", "PROMPTKITCHEN_DEEPSEEK_API_KEY", "DEEPSEEK_API_KEY"),
    )
    allowed_origin: str = Field(
        default="https://prompt-kitchen.netlify.app",
        validation_alias=AliasChoices("allowed_origin", "PROMPTKITCHEN_ALLOWED_ORIGIN", "ALLOWED_ORIGIN"),
    )
    port: int = Field(
        default=3000,
        validation_alias=AliasChoices("port", "PROMPTKITCHEN_PORT", "PORT"),
    )
    host: str = "0.0.0.0"

    # DeepSeek OpenAI-compatible API
    deepseek_base_url: str = "https://api.deepseek.com/v1"
    deepseek_model: str = "deepseek-chat"
    temperature: float = 0.7
    max_tokens: int = 1500
    # Upper bound for the single outbound call; expiry is reported as a transport failure.
    request_timeout_s: float = 60.0

    log_level: str = "INFO"
