"""Common dependency functions for API routes."""

from fastapi import Depends

from message_renderer.core.config import Settings, get_settings
from message_renderer.services.ollama_client import OllamaClient


def get_app_settings() -> Settings:
    return get_settings()


def get_ollama_client(settings: Settings = Depends(get_app_settings)) -> OllamaClient:
    return OllamaClient(
        base_url=settings.ollama_base_url,
        model=settings.chat_model,
        timeout=settings.ollama_timeout,
    )
