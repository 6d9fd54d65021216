"""
Input sanitization for user-supplied text and media before it reaches a provider.
"""
import re
from typing import Iterable, Optional

MAX_DESCRIPTION_LENGTH = 5000
MAX_NOTES_LENGTH = 2000
MAX_HISTORY_ITEMS = 50
MAX_HISTORY_ITEM_LENGTH = 200
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png"}


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """Strip HTML tags and control characters, then truncate.

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length (truncates if exceeded)

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = _strip_html_tags(text.strip())
    text = _remove_control_chars(text)

    if max_length and len(text) > max_length:
        text = text[:max_length]

    return text.strip()


def sanitize_description(text: Optional[str]) -> str:
    """Sanitize the user's situation description."""
    return sanitize_text(text, max_length=MAX_DESCRIPTION_LENGTH)


def sanitize_notes(text: Optional[str]) -> str:
    """Sanitize free-text medical notes."""
    return sanitize_text(text, max_length=MAX_NOTES_LENGTH)


def sanitize_history_items(items: Iterable[str]) -> list[str]:
    """Sanitize allergy/medication/condition entries, dropping blanks.

    At most MAX_HISTORY_ITEMS entries of MAX_HISTORY_ITEM_LENGTH each are kept.
    """
    cleaned = []
    for item in items:
        item = sanitize_text(item, max_length=MAX_HISTORY_ITEM_LENGTH)
        if item:
            cleaned.append(item)
        if len(cleaned) == MAX_HISTORY_ITEMS:
            break
    return cleaned


def is_supported_image_type(content_type: Optional[str]) -> bool:
    return bool(content_type) and content_type.lower() in ALLOWED_IMAGE_TYPES


def _strip_html_tags(text: str) -> str:
    text = re.sub(r"<script[^>]*>.*?</script>", "", text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r"<style[^>]*>.*?</style>", "", text, flags=re.IGNORECASE | re.DOTALL)
    return re.sub(r"<[^>]+>", "", text)


def _remove_control_chars(text: str) -> str:
    # Keeps \t, \n and \r
    return re.sub(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", "", text)
