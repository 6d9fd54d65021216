"""
Shared behaviour for the per-vendor first-aid guidance adapters.

An adapter only has to implement the outbound completion call (and, if the
vendor can, audio transcription). Reading media, composing the prompt,
parsing the answer and classifying failures happen here.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from pydantic import ValidationError

from .errors import AIServiceError, ProviderError, ResponseParseError, ServiceUnavailableError
from .json_utils import extract_json
from .media import load_images
from .models import AssessmentResult, MedicalHistory
from .prompts import GuidancePrompt, compose_guidance_prompt
from .text_extractor import extract_structured_data

logger = logging.getLogger(__name__)

UNAVAILABLE_STATUS_CODES = frozenset({401, 429})


def status_code_of(error: BaseException) -> Optional[int]:
    """Best-effort HTTP status of an SDK or httpx error."""
    for attr in ("status_code", "code"):
        value = getattr(error, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(error, "response", None)
    value = getattr(response, "status_code", None)
    return value if isinstance(value, int) else None


class FirstAidProvider(ABC):
    """One AI vendor, turned into an AssessmentResult producer."""

    name: str = ""
    display_name: str = ""

    async def generate_guidance(
        self,
        images: Sequence[str] = (),
        text: str = "",
        audio_file_path: Optional[str] = None,
        medical_history: Optional[MedicalHistory] = None,
    ) -> AssessmentResult:
        """Produce first-aid guidance from images, text and optional audio.

        Raises:
            ServiceUnavailableError: the vendor answered 401 or 429.
            ProviderError: any other failure, including an empty answer.
        """
        try:
            encoded_images = await load_images(images)
            transcript = await self.transcribe(audio_file_path)
            prompt = compose_guidance_prompt(text, transcript, medical_history, encoded_images)
            content = await self._complete(prompt)
        except AIServiceError:
            raise
        except Exception as e:
            logger.error(f"Error generating first aid guidance with {self.display_name}: {e}")
            raise self.classify_error(e) from e

        if not content or not content.strip():
            raise ProviderError(self.display_name, "No content in the response")
        return self.parse_response(content)

    async def transcribe(self, audio_file_path: Optional[str]) -> str:
        """Speech-to-text for the recorded clip; vendors without it return ''."""
        return ""

    async def close(self) -> None:
        """Release the vendor client's connections."""

    @abstractmethod
    async def _complete(self, prompt: GuidancePrompt) -> str:
        """Send the prompt and return the raw text of the model's answer."""

    def classify_error(self, error: Exception) -> AIServiceError:
        status = status_code_of(error)
        if status in UNAVAILABLE_STATUS_CODES:
            return ServiceUnavailableError(self.display_name, status_code=status)
        return ProviderError(self.display_name, str(error) or type(error).__name__)

    def parse_response(self, content: str) -> AssessmentResult:
        """JSON first; fall back to labeled-section extraction."""
        try:
            return AssessmentResult.from_payload(extract_json(content))
        except (ResponseParseError, ValidationError) as e:
            logger.warning(
                f"Failed to parse {self.display_name} response as JSON ({e}); "
                "extracting structured data from text"
            )
            return extract_structured_data(content)
