"""
Structured logging for the MedAssist AI core.

Every guidance request gets a short request id; all provider attempts made
for it are logged as JSON lines carrying that id, the provider, the outcome
and the elapsed time.
"""
import json
import logging
import re
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

# SDK and transport loggers that echo every HTTP exchange at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "openai", "google_genai")

_API_KEY = re.compile(r"\b(sk-[A-Za-z0-9_-]{4})[A-Za-z0-9_-]+|\b(AIza[A-Za-z0-9_-]{4})[A-Za-z0-9_-]+")


def get_request_id() -> Optional[str]:
    return request_id_var.get()


def set_request_id(request_id: Optional[str] = None) -> str:
    """Set the request id for the current context. Returns the id."""
    if request_id is None:
        request_id = uuid.uuid4().hex[:8]
    request_id_var.set(request_id)
    return request_id


def redact_secrets(text: str) -> str:
    """Mask OpenAI/Google style API keys that providers echo back in errors."""
    return _API_KEY.sub(lambda m: f"{m.group(1) or m.group(2)}...", text)


class JSONFormatter(logging.Formatter):
    def __init__(self, service_name: str = "medassist"):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service_name,
            "level": record.levelname,
            "logger": record.name,
            "message": redact_secrets(record.getMessage()),
        }

        request_id = get_request_id()
        if request_id:
            entry["request_id"] = request_id

        data = getattr(record, "extra_data", None)
        if data:
            entry["data"] = data

        if record.exc_info:
            entry["exception"] = redact_secrets(self.formatException(record.exc_info))

        return json.dumps(entry, default=str)


class StructuredLogger:
    """Logger whose keyword arguments land in the JSON "data" field."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def log(self, level: int, message: str, **data: Any) -> None:
        self.logger.log(level, message, extra={"extra_data": data} if data else {})

    def debug(self, message: str, **data: Any) -> None:
        self.log(logging.DEBUG, message, **data)

    def info(self, message: str, **data: Any) -> None:
        self.log(logging.INFO, message, **data)

    def warning(self, message: str, **data: Any) -> None:
        self.log(logging.WARNING, message, **data)

    def error(self, message: str, **data: Any) -> None:
        self.log(logging.ERROR, message, **data)


def log_provider_attempt(
    logger: StructuredLogger,
    provider: str,
    duration_ms: float,
    error: Optional[BaseException] = None,
) -> None:
    """Record the outcome of one provider call.

    Failures are warnings: the orchestrator still has other providers to try.
    """
    data = {"provider": provider, "duration_ms": round(duration_ms, 1)}
    if error is None:
        logger.info(f"{provider} answered in {data['duration_ms']}ms", outcome="ok", **data)
        return

    data["error_type"] = type(error).__name__
    status_code = getattr(error, "status_code", None)
    if status_code is not None:
        data["status_code"] = status_code
    logger.warning(
        f"{provider} failed after {data['duration_ms']}ms: {redact_secrets(str(error))}",
        outcome="error",
        **data,
    )


def setup_logging(
    level: int = logging.INFO,
    service_name: str = "medassist",
    use_json: bool = True,
) -> None:
    """Configure the root logger.

    Args:
        level: Logging level (default: INFO)
        service_name: Service name for log entries
        use_json: Whether to use JSON formatting (default: True)
    """
    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        JSONFormatter(service_name) if use_json
        else logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
