"""Configuration management for the virtual try-on service."""

from pydantic import AliasChoices, BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationConfig(BaseModel):
    """Image generation settings."""
    model: str = "gemini-2.5-flash-image"
    aspect_ratio: str = "3:4"  # portrait output suits full-body fashion shots
    timeout: float = 120.0  # seconds for the single generate_content call
    default_media_type: str = "image/jpeg"  # used when a data URI prefix can't be parsed


class AppConfig(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
    )

    # Gemini credential (loaded from .env or the process environment)
    api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )

    # Sub-configs
    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    # Output
    download_prefix: str = "vogue-ai-tryon"

    # In-memory sessions kept by the API; least recently used are evicted
    max_sessions: int = Field(default=100, ge=1)

    log_level: str = "INFO"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key and self.api_key.strip())


def load_config() -> AppConfig:
    """Load configuration from environment and defaults."""
    return AppConfig()
