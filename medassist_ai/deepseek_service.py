"""
DeepSeek adapter - HTTP client for DeepSeek's OpenAI-style chat API.

Talks to the REST endpoints directly with httpx; pass an httpx.AsyncClient
(e.g. one built on httpx.MockTransport) to control the transport.
"""
import logging
from typing import Optional

import httpx

from .config import DEFAULT_DEEPSEEK_BASE_URL, DEFAULT_DEEPSEEK_MODEL, DEFAULT_TEMPERATURE, AIConfig
from .media import load_audio
from .prompts import GuidancePrompt
from .provider_base import FirstAidProvider
from .provider_requests import build_deepseek_request

logger = logging.getLogger(__name__)

TRANSCRIPTION_MODEL = "deepseek-audio-transcribe"


class DeepSeekService(FirstAidProvider):
    name = "deepseek"
    display_name = "DeepSeek"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_DEEPSEEK_MODEL,
        base_url: str = DEFAULT_DEEPSEEK_BASE_URL,
        temperature: float = DEFAULT_TEMPERATURE,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        if client is None:
            client = httpx.AsyncClient(timeout=timeout) if timeout is not None else httpx.AsyncClient()
        self.client = client

    @classmethod
    def from_config(cls, config: AIConfig, client: Optional[httpx.AsyncClient] = None) -> "DeepSeekService":
        return cls(
            api_key=config.deepseek_api_key,
            model=config.deepseek_model,
            base_url=config.deepseek_base_url,
            temperature=config.temperature,
            timeout=config.request_timeout,
            client=client,
        )

    @property
    def _headers(self) -> dict:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    async def transcribe(self, audio_file_path: Optional[str]) -> str:
        clip = await load_audio(audio_file_path)
        if clip is None:
            return ""
        try:
            response = await self.client.post(
                f"{self.base_url}/audio/transcriptions",
                json={"file": clip.base64, "model": TRANSCRIPTION_MODEL},
                headers=self._headers,
            )
            response.raise_for_status()
            text = response.json().get("text") or ""
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error transcribing audio with DeepSeek: {e}")
            return ""
        logger.info(f"DeepSeek transcription: {len(text)} chars")
        return text.strip()

    async def _complete(self, prompt: GuidancePrompt) -> str:
        request = build_deepseek_request(prompt, self.model, self.temperature)
        response = await self.client.post(
            f"{self.base_url}/chat/completions",
            json=request.to_payload(),
            headers=self._headers,
        )
        if response.is_error:
            logger.error(f"DeepSeek HTTP error: {response.status_code} - {response.text[:200]}")
        response.raise_for_status()
        data = response.json()
        return data["choices"][0]["message"]["content"] or ""

    async def close(self) -> None:
        await self.client.aclose()
