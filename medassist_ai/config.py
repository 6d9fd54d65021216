"""
Runtime configuration for the AI providers.

Values come from the process environment (optionally seeded from a .env
file) and are frozen into an AIConfig that is handed to each adapter, so
nothing reads os.environ after construction.
"""
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"
DEFAULT_DEEPSEEK_MODEL = "deepseek-vision"
DEFAULT_DEEPSEEK_BASE_URL = "https://api.deepseek.com/v1"
DEFAULT_TEMPERATURE = 0.7


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {name}={value!r}")
        return default


def _env_str(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class AIConfig:
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    preferred_provider: Optional[str] = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    gemini_model: str = DEFAULT_GEMINI_MODEL
    deepseek_model: str = DEFAULT_DEEPSEEK_MODEL
    deepseek_base_url: str = DEFAULT_DEEPSEEK_BASE_URL
    temperature: float = DEFAULT_TEMPERATURE
    request_timeout: Optional[float] = None  # None keeps each client's default

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "AIConfig":
        """Build a config from environment variables (and .env when present)."""
        if load_env_file:
            load_dotenv()

        preferred = _env_str("PREFERRED_AI_API")
        return cls(
            openai_api_key=_env_str("OPENAI_API_KEY"),
            gemini_api_key=_env_str("GEMINI_API_KEY") or _env_str("GOOGLE_API_KEY"),
            deepseek_api_key=_env_str("DEEPSEEK_API_KEY"),
            preferred_provider=preferred.lower() if preferred else None,
            openai_model=_env_str("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
            gemini_model=_env_str("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL,
            deepseek_model=_env_str("DEEPSEEK_MODEL") or DEFAULT_DEEPSEEK_MODEL,
            deepseek_base_url=_env_str("DEEPSEEK_BASE_URL") or DEFAULT_DEEPSEEK_BASE_URL,
            temperature=_env_float("AI_TEMPERATURE", DEFAULT_TEMPERATURE),
            request_timeout=_env_float("AI_REQUEST_TIMEOUT", None),
        )

    def api_key_for(self, provider: str) -> Optional[str]:
        return {
            "openai": self.openai_api_key,
            "gemini": self.gemini_api_key,
            "deepseek": self.deepseek_api_key,
        }.get(str(getattr(provider, "value", provider)).lower())

    def has_credentials(self, provider: str) -> bool:
        return bool(self.api_key_for(provider))

    def configured_providers(self) -> list[str]:
        return [name for name in ("gemini", "deepseek", "openai") if self.has_credentials(name)]
