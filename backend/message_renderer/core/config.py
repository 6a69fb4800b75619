"""Application configuration and settings management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="MESSAGE_RENDERER_", extra="ignore")

    app_name: str = Field(default="Message Renderer API", description="Human readable application name.")
    environment: Literal["local", "development", "staging", "production"] = Field(
        default="local",
        description="Deployment environment name.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root logging level.",
    )
    ollama_base_url: str = Field(
        default="http://ollama:11434",
        description="Base URL for the Ollama service.",
    )
    chat_model: str = Field(
        default="qwen2.5:1.5b",
        description="Model used for the chat endpoints.",
    )
    ollama_timeout: float = Field(default=120.0, gt=0, description="Timeout for Ollama requests, in seconds.")
    chat_system_prompt: str | None = Field(
        default=(
            "Answer in concise markdown. Put your step-by-step reasoning inside <thinking></thinking>"
            " before the answer, and finish with two or three follow-up questions the user could ask,"
            " one per line, inside <suggestions></suggestions>."
        ),
        description="System prompt prepended to every chat conversation.",
    )
    reveal_chunk_size: int = Field(default=5, ge=1, description="Characters revealed per tick.")
    reveal_interval_ms: int = Field(default=20, ge=1, description="Delay between reveal ticks.")
    enable_suggestions: bool = Field(
        default=True,
        description="Extract follow-up suggestions from model replies.",
    )

    @property
    def reveal_interval(self) -> float:
        return self.reveal_interval_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()
