"""MedAssist AI core: first-aid guidance with multi-provider fallback."""
from .ai_service import (
    DEFAULT_PROVIDER_ORDER,
    FirstAidOrchestrator,
    ProviderAttempt,
    ProviderName,
    generate_first_aid_guidance_unified,
)
from .config import AIConfig
from .errors import (
    AIServiceError,
    AllProvidersUnavailableError,
    NoAIServiceAvailableError,
    ProviderError,
    ServiceUnavailableError,
    to_http_exception,
)
from .models import AssessmentResult, GuidanceRecord, MedicalHistory, Severity, SeverityLevel
from .text_extractor import extract_structured_data

__all__ = [
    "AIConfig",
    "AIServiceError",
    "AllProvidersUnavailableError",
    "AssessmentResult",
    "DEFAULT_PROVIDER_ORDER",
    "FirstAidOrchestrator",
    "GuidanceRecord",
    "MedicalHistory",
    "NoAIServiceAvailableError",
    "ProviderAttempt",
    "ProviderError",
    "ProviderName",
    "ServiceUnavailableError",
    "Severity",
    "SeverityLevel",
    "extract_structured_data",
    "generate_first_aid_guidance_unified",
    "to_http_exception",
]
