"""
OpenAI adapter: GPT-4o chat completions with Whisper transcription.
"""
import logging
from typing import Optional

from openai import AsyncOpenAI

from .config import DEFAULT_OPENAI_MODEL, DEFAULT_TEMPERATURE, AIConfig
from .media import load_audio
from .prompts import GuidancePrompt
from .provider_base import FirstAidProvider
from .provider_requests import build_openai_request

logger = logging.getLogger(__name__)

WHISPER_MODEL = "whisper-1"


class OpenAIService(FirstAidProvider):
    name = "openai"
    display_name = "OpenAI"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_OPENAI_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: Optional[float] = None,
        client=None,
    ):
        if client is None:
            client_kwargs = {"api_key": api_key}
            if timeout is not None:
                client_kwargs["timeout"] = timeout
            client = AsyncOpenAI(**client_kwargs)
        self.client = client
        self.model = model
        self.temperature = temperature

    @classmethod
    def from_config(cls, config: AIConfig, client=None) -> "OpenAIService":
        return cls(
            api_key=config.openai_api_key,
            model=config.openai_model,
            temperature=config.temperature,
            timeout=config.request_timeout,
            client=client,
        )

    async def transcribe(self, audio_file_path: Optional[str]) -> str:
        clip = await load_audio(audio_file_path)
        if clip is None:
            return ""
        try:
            transcription = await self.client.audio.transcriptions.create(
                model=WHISPER_MODEL,
                file=(clip.filename, clip.data, clip.mime_type),
            )
        except Exception as e:
            # Guidance can still be produced from text and images.
            logger.error(f"Error transcribing audio with OpenAI: {e}")
            return ""
        text = getattr(transcription, "text", "") or ""
        logger.info(f"Whisper transcription: {len(text)} chars")
        return text.strip()

    async def _complete(self, prompt: GuidancePrompt) -> str:
        request = build_openai_request(prompt, self.model, self.temperature)
        response = await self.client.chat.completions.create(**request.to_kwargs())
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        await self.client.close()
