"""
Gemini adapter using the google-genai SDK.

Gemini gets no transcription step: when a recording is supplied, a note
saying so is added to the prompt instead of dropping it silently.
"""
import logging
from typing import Optional

from google import genai
from google.genai import types

from .config import DEFAULT_GEMINI_MODEL, DEFAULT_TEMPERATURE, AIConfig
from .prompts import GEMINI_AUDIO_PLACEHOLDER, GuidancePrompt
from .provider_base import FirstAidProvider
from .provider_requests import build_gemini_request

logger = logging.getLogger(__name__)


class GeminiService(FirstAidProvider):
    name = "gemini"
    display_name = "Gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_GEMINI_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: Optional[float] = None,
        client=None,
    ):
        if client is None:
            http_options = None
            if timeout is not None:
                http_options = types.HttpOptions(timeout=int(timeout * 1000))
            client = genai.Client(api_key=api_key, http_options=http_options)
        self.client = client
        self.model = model
        self.temperature = temperature
        logger.info(f"Gemini adapter using model: {self.model}")

    @classmethod
    def from_config(cls, config: AIConfig, client=None) -> "GeminiService":
        return cls(
            api_key=config.gemini_api_key,
            model=config.gemini_model,
            temperature=config.temperature,
            timeout=config.request_timeout,
            client=client,
        )

    async def transcribe(self, audio_file_path: Optional[str]) -> str:
        if not audio_file_path:
            return ""
        logger.info("Gemini has no transcription step; noting audio in prompt")
        return GEMINI_AUDIO_PLACEHOLDER

    async def _complete(self, prompt: GuidancePrompt) -> str:
        request = build_gemini_request(prompt, self.model, self.temperature)
        response = await self.client.aio.models.generate_content(
            model=request.model,
            contents=request.to_contents(),
            config=request.to_config(),
        )
        return response.text or ""

    async def close(self) -> None:
        # Older google-genai releases have no async close on client.aio
        aclose = getattr(self.client.aio, "aclose", None)
        if aclose is not None:
            await aclose()
