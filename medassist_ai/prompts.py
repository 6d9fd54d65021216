"""
Prompt templates and vendor-neutral prompt composition for first-aid guidance.
"""
from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .formatters import format_history_block
from .input_sanitization import sanitize_description
from .media import EncodedImage
from .models import MedicalHistory

FIRST_AID_SYSTEM_PROMPT = """You are a medical first aid assistant.
Analyze the provided information (images, text description, and/or audio transcription)
about an injury or medical condition and provide first aid guidance with a severity assessment.

Respond ONLY with a JSON object with the following structure:
{
  "assessment": "Brief description of the injury or condition based on the provided inputs",
  "steps": ["Step 1 of first aid treatment", "Step 2", "..."],
  "warnings": ["Warning sign that means professional medical attention is needed", "..."],
  "severity": {
    "level": "minor" | "requires_attention" | "emergency",
    "description": "Explanation of why this severity level was assigned"
  }
}

Severity levels:
- "minor": Injuries that can be safely treated at home (cuts, scrapes, minor burns, etc.)
- "requires_attention": Conditions that need medical care soon but are not immediately life-threatening
- "emergency": Conditions requiring immediate emergency medical services (severe bleeding, loss of consciousness, chest pain, etc.)

Steps must be ordered as they should be performed."""

IMAGE_ANALYSIS_PROMPT = "Please analyze this image of the injury/condition:"

GEMINI_AUDIO_PLACEHOLDER = (
    "Audio description provided but transcription not available with Gemini."
)


@dataclass(frozen=True)
class TextItem:
    text: str


@dataclass(frozen=True)
class ImageItem:
    image: EncodedImage


ContentItem = Union[TextItem, ImageItem]


@dataclass(frozen=True)
class GuidancePrompt:
    """Vendor-neutral prompt: a system instruction plus ordered content items."""
    system_instruction: str
    items: list = field(default_factory=list)

    @property
    def text_items(self) -> list[TextItem]:
        return [item for item in self.items if isinstance(item, TextItem)]

    @property
    def image_items(self) -> list[ImageItem]:
        return [item for item in self.items if isinstance(item, ImageItem)]


def compose_guidance_prompt(
    text: str,
    transcript: Optional[str] = None,
    medical_history: Optional[MedicalHistory] = None,
    images: Sequence[EncodedImage] = (),
) -> GuidancePrompt:
    """Assemble description, history, transcript and images in that order."""
    items: list[ContentItem] = []

    description = sanitize_description(text)
    if description:
        items.append(TextItem(f"Situation description: {description}"))

    history_block = format_history_block(medical_history)
    if history_block:
        items.append(TextItem(history_block))

    if transcript and transcript.strip():
        items.append(TextItem(f"Additional voice information: {transcript.strip()}"))

    if not items:
        items.append(TextItem(
            "Situation description: not provided. Base the assessment on the attached images."
            if images else "Situation description: not provided."
        ))

    for image in images:
        items.append(ImageItem(image))

    return GuidancePrompt(system_instruction=FIRST_AID_SYSTEM_PROMPT, items=items)
