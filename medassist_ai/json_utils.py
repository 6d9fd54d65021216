"""
JSON extraction for provider responses.

Providers are asked for a JSON object but sometimes wrap it in markdown
fences, surround it with prose, break long strings across lines or leave a
trailing comma. extract_json undoes those; anything it cannot recover is a
ResponseParseError for the caller to route to the text extractor.
"""
import json
import logging
import re

from .errors import ResponseParseError

logger = logging.getLogger(__name__)

_CODE_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)
_TRAILING_COMMA = re.compile(r",\s*([}\]])")


def _fix_newlines_in_json_strings(text: str) -> str:
    """Replace literal newlines inside JSON string values with spaces.

    Walks the text tracking whether we're inside a quoted string, so
    newlines between tokens are left alone.
    """
    result = []
    in_string = False
    escaped = False
    for c in text:
        if escaped:
            result.append(c)
            escaped = False
            continue
        if c == "\\" and in_string:
            result.append(c)
            escaped = True
            continue
        if c == '"':
            in_string = not in_string
        result.append(" " if c == "\n" and in_string else c)
    return "".join(result)


def _loads_object(text: str) -> dict:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ResponseParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def extract_json(text: str) -> dict:
    """Extract a JSON object from a model response.

    Raises:
        ResponseParseError: if no JSON object can be recovered.
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty response text")

    # Fast path: the provider honoured the JSON response format.
    try:
        return _loads_object(text)
    except (json.JSONDecodeError, ResponseParseError):
        pass

    candidate = text
    fence = _CODE_BLOCK.search(candidate)
    if fence:
        candidate = fence.group(1)

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start == -1 or end <= start:
        raise ResponseParseError("Response contained no JSON object")
    candidate = _fix_newlines_in_json_strings(candidate[start:end + 1])

    try:
        return _loads_object(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON parse error (direct): {e}")

    try:
        return _loads_object(_TRAILING_COMMA.sub(r"\1", candidate))
    except json.JSONDecodeError as e:
        logger.warning(f"JSON parse failed after repair: {e}")
        raise ResponseParseError(str(e)) from e
