from .base import GenerationBackend
from .factory import available_backends, create_backend
from .gemini import GeminiBackend
from .openai_compatible import OpenAICompatibleBackend

__all__ = [
    "GenerationBackend",
    "GeminiBackend",
    "OpenAICompatibleBackend",
    "available_backends",
    "create_backend",
]
