# -*- coding: utf-8 -*-
"""
@Time    : 2025/8/20 22:05
@Author  : QIN2DIM
@GitHub  : https://github.com/QIN2DIM
@Desc    : Minimal async client for the Gemini generateContent endpoint
"""
from httpx import AsyncClient
from loguru import logger

from gemini.models import GenerateContentRequest, GenerateContentResponse
from settings import settings


class GeminiError(Exception):
    """The model answered, but not with usable text"""


class GeminiClient:
    def __init__(
        self,
        api_key: str = settings.GEMINI_API_KEY.get_secret_value(),
        base_url: str = settings.GEMINI_BASE_URL,
        model: str = settings.MODEL_NAME,
        timeout: float = settings.GEMINI_REQUEST_TIMEOUT,
        *,
        client: AsyncClient | None = None,
    ):
        self.model = model
        headers = {"x-goog-api-key": api_key}
        self._client = client or AsyncClient(base_url=base_url, headers=headers, timeout=timeout)

    async def generate(self, prompt: str, **generation_config) -> str:
        """
        Send one prompt and return the model's text

        Raises:
            httpx.HTTPError: transport failure or non-2xx status
            GeminiError: blocked prompt or empty candidate list

        """
        payload = GenerateContentRequest.from_prompt(prompt, **generation_config)
        response = await self._client.post(
            f"/models/{self.model}:generateContent", json=payload.dumps_params()
        )
        response.raise_for_status()

        result = GenerateContentResponse(**response.json())
        if not (text := result.text):
            reason = result.stop_reason or "no candidates"
            raise GeminiError(f"empty response from {self.model} ({reason})")

        logger.trace(f"generate: {self.model} -> {text[:80]!r}")
        return text

    async def aclose(self):
        await self._client.aclose()
