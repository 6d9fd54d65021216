"""
Unified first-aid guidance with provider fallback.

Providers are tried one at a time in priority order: the preferred provider
(PREFERRED_AI_API) first when it has a key, then Gemini, DeepSeek, OpenAI.
The first usable answer is returned as-is. When every provider fails the
caller gets one generic "unavailable" error; per-provider failures are kept
on the exception and in the logs, never in its message.
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional, Sequence

from .config import AIConfig
from .deepseek_service import DeepSeekService
from .errors import AIServiceError, AllProvidersUnavailableError, NoAIServiceAvailableError
from .gemini_service import GeminiService
from .models import AssessmentResult, MedicalHistory
from .openai_service import OpenAIService
from .provider_base import FirstAidProvider
from .structured_logging import StructuredLogger, get_request_id, log_provider_attempt, set_request_id

logger = StructuredLogger(__name__)


class ProviderName(str, Enum):
    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
    OPENAI = "openai"


DEFAULT_PROVIDER_ORDER = (ProviderName.GEMINI, ProviderName.DEEPSEEK, ProviderName.OPENAI)

PROVIDER_FACTORIES: dict[ProviderName, Callable[[AIConfig], FirstAidProvider]] = {
    ProviderName.GEMINI: GeminiService.from_config,
    ProviderName.DEEPSEEK: DeepSeekService.from_config,
    ProviderName.OPENAI: OpenAIService.from_config,
}


@dataclass(frozen=True)
class ProviderAttempt:
    """One failed provider call, kept for diagnostics."""

    provider: ProviderName
    error: AIServiceError


class FirstAidOrchestrator:
    """Sequential fallback over the configured AI providers."""

    def __init__(
        self,
        config: AIConfig,
        providers: Optional[Mapping[ProviderName, FirstAidProvider]] = None,
    ):
        self.config = config
        self._providers: dict[ProviderName, FirstAidProvider] = dict(providers or {})
        # Adapters built here are closed here; injected ones belong to the caller.
        self._built: list[ProviderName] = []

    async def __aenter__(self) -> "FirstAidOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the clients of every adapter this orchestrator created."""
        while self._built:
            name = self._built.pop()
            provider = self._providers.pop(name)
            try:
                await provider.close()
            except Exception as e:
                logger.warning(f"Failed to close {provider.display_name} client: {e}", provider=name.value)

    def _preferred(self) -> Optional[ProviderName]:
        preferred = self.config.preferred_provider
        if not preferred:
            return None
        try:
            name = ProviderName(preferred.lower())
        except ValueError:
            logger.warning(f"Unknown preferred AI provider '{preferred}', ignoring", preferred=preferred)
            return None
        if not self.config.has_credentials(name):
            logger.warning(
                f"Preferred AI provider '{name.value}' has no API key configured, skipping",
                provider=name.value,
            )
            return None
        return name

    def provider_order(self) -> list[ProviderName]:
        """Providers to try, in order. Only providers with a key are listed."""
        order: list[ProviderName] = []
        preferred = self._preferred()
        if preferred is not None:
            order.append(preferred)
        for name in DEFAULT_PROVIDER_ORDER:
            if name not in order and self.config.has_credentials(name):
                order.append(name)
        return order

    def get_provider(self, name: ProviderName) -> FirstAidProvider:
        if name not in self._providers:
            self._providers[name] = PROVIDER_FACTORIES[name](self.config)
            self._built.append(name)
        return self._providers[name]

    async def generate(
        self,
        images: Sequence[str] = (),
        text: str = "",
        audio_file_path: Optional[str] = None,
        medical_history: Optional[MedicalHistory] = None,
    ) -> AssessmentResult:
        """Return guidance from the first provider that succeeds.

        Raises:
            NoAIServiceAvailableError: no provider has an API key.
            AllProvidersUnavailableError: every configured provider failed.
        """
        request_id = get_request_id() or set_request_id()
        order = self.provider_order()
        if not order:
            logger.error("No AI service configured", request_id=request_id)
            raise NoAIServiceAvailableError()

        attempts: list[ProviderAttempt] = []
        for name in order:
            provider = self.get_provider(name)
            logger.info(f"Trying {provider.display_name} for first aid guidance", provider=name.value)
            started = time.perf_counter()
            try:
                result = await provider.generate_guidance(
                    images=images,
                    text=text,
                    audio_file_path=audio_file_path,
                    medical_history=medical_history,
                )
            except AIServiceError as e:
                attempts.append(ProviderAttempt(name, e))
                log_provider_attempt(logger, name.value, (time.perf_counter() - started) * 1000, error=e)
                continue
            log_provider_attempt(logger, name.value, (time.perf_counter() - started) * 1000)
            return result

        logger.error(
            "All AI providers failed",
            providers=[attempt.provider.value for attempt in attempts],
        )
        raise AllProvidersUnavailableError(attempts)


async def generate_first_aid_guidance_unified(
    images: Sequence[str] = (),
    text: str = "",
    audio_file_path: Optional[str] = None,
    medical_history: Optional[MedicalHistory] = None,
    config: Optional[AIConfig] = None,
) -> AssessmentResult:
    """Generate first-aid guidance using whichever AI provider is available."""
    async with FirstAidOrchestrator(config or AIConfig.from_env()) as orchestrator:
        return await orchestrator.generate(
            images=images,
            text=text,
            audio_file_path=audio_file_path,
            medical_history=medical_history,
        )
