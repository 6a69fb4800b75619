"""Health check endpoints."""

import logging

from fastapi import APIRouter, Depends

from message_renderer.api.deps import get_ollama_client
from message_renderer.exceptions import OllamaError
from message_renderer.schemas.chat import HealthResponse
from message_renderer.services.ollama_client import OllamaClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["system"], response_model=HealthResponse)
async def healthcheck(client: OllamaClient = Depends(get_ollama_client)) -> HealthResponse:
    """Readiness check that also reports whether the chat model is pulled."""

    model_available = False
    try:
        tags = await client.list_models()
        models = tags.get("models", []) if isinstance(tags, dict) else []
        for item in models:
            name = item.get("name") or item.get("model")
            if name == client.model:
                model_available = True
                break
    except OllamaError as exc:
        logger.warning("Failed to query Ollama tags: %s", exc)

    return HealthResponse(
        status="ok",
        model=client.model,
        ollama=client.base_url,
        model_available=model_available,
    )
