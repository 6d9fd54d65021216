"""
Vendor-specific request shapes.

Each provider gets its own frozen request type and builder so the payload
layout of one vendor can't leak into another. All are built from the same
GuidancePrompt.
"""
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from google.genai import types

from .prompts import IMAGE_ANALYSIS_PROMPT, GuidancePrompt, ImageItem, TextItem

JSON_RESPONSE_FORMAT = {"type": "json_object"}

OPENAI_MAX_TOKENS = 800
GEMINI_MAX_OUTPUT_TOKENS = 1000
DEEPSEEK_MAX_TOKENS = 1000

DEEPSEEK_IMAGE_PROMPT = (
    "Please analyze this image of the injury/condition and provide appropriate "
    "first aid guidance."
)


# --- OpenAI ---

@dataclass(frozen=True)
class OpenAIRequest:
    model: str
    messages: list
    temperature: float
    max_tokens: int = OPENAI_MAX_TOKENS
    kind: Literal["openai"] = "openai"

    def to_kwargs(self) -> dict:
        return {
            "model": self.model,
            "messages": self.messages,
            "response_format": JSON_RESPONSE_FORMAT,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }


def build_openai_request(prompt: GuidancePrompt, model: str, temperature: float) -> OpenAIRequest:
    """System message plus one multimodal user message."""
    content: list[dict] = []
    for item in prompt.items:
        if isinstance(item, TextItem):
            content.append({"type": "text", "text": item.text})
        elif isinstance(item, ImageItem):
            content.append({"type": "image_url", "image_url": {"url": item.image.data_url}})
    messages = [
        {"role": "system", "content": prompt.system_instruction},
        {"role": "user", "content": content},
    ]
    return OpenAIRequest(model=model, messages=messages, temperature=temperature)


# --- Gemini ---

@dataclass(frozen=True)
class GeminiRequest:
    model: str
    system_instruction: str
    parts: list = field(default_factory=list)  # TextItem | ImageItem, in order
    temperature: float = 0.7
    max_output_tokens: int = GEMINI_MAX_OUTPUT_TOKENS
    kind: Literal["gemini"] = "gemini"

    def to_contents(self) -> list[types.Content]:
        sdk_parts = []
        for part in self.parts:
            if isinstance(part, TextItem):
                sdk_parts.append(types.Part.from_text(text=part.text))
            else:
                sdk_parts.append(types.Part.from_bytes(
                    data=part.image.data, mime_type=part.image.mime_type,
                ))
        return [types.Content(role="user", parts=sdk_parts)]

    def to_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            system_instruction=self.system_instruction,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type="application/json",
        )


def build_gemini_request(prompt: GuidancePrompt, model: str, temperature: float) -> GeminiRequest:
    """Text parts first, each image preceded by an analysis instruction."""
    parts: list[Union[TextItem, ImageItem]] = list(prompt.text_items)
    for image_item in prompt.image_items:
        parts.append(TextItem(IMAGE_ANALYSIS_PROMPT))
        parts.append(image_item)
    return GeminiRequest(
        model=model,
        system_instruction=prompt.system_instruction,
        parts=parts,
        temperature=temperature,
    )


# --- DeepSeek ---

@dataclass(frozen=True)
class DeepSeekRequest:
    model: str
    messages: list
    temperature: float
    max_tokens: int = DEEPSEEK_MAX_TOKENS
    kind: Literal["deepseek"] = "deepseek"

    def to_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": self.messages,
            "response_format": JSON_RESPONSE_FORMAT,
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }


def build_deepseek_request(prompt: GuidancePrompt, model: str, temperature: float) -> DeepSeekRequest:
    """System message, one user text message, then one user message per image."""
    messages: list[dict] = [{"role": "system", "content": prompt.system_instruction}]
    text = "\n\n".join(item.text for item in prompt.text_items)
    if text:
        messages.append({"role": "user", "content": text})
    for image_item in prompt.image_items:
        messages.append({
            "role": "user",
            "content": [
                {"type": "text", "text": DEEPSEEK_IMAGE_PROMPT},
                {"type": "image_url", "image_url": {"url": image_item.image.data_url}},
            ],
        })
    return DeepSeekRequest(model=model, messages=messages, temperature=temperature)


ProviderRequest = Union[OpenAIRequest, GeminiRequest, DeepSeekRequest]
