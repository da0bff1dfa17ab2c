from .gemini_client import GeminiClient, GeminiError

__all__ = ["GeminiClient", "GeminiError"]
