"""Exception types raised outside the (total) parsing core."""


class MessageRendererError(Exception):
    """Common base exception."""


class RevealError(MessageRendererError, ValueError):
    """Raised when a reveal source is replaced by text that does not extend it."""


class OllamaError(MessageRendererError, RuntimeError):
    """Raised when the Ollama API fails or returns an unexpected response."""


__all__ = ["MessageRendererError", "OllamaError", "RevealError"]
