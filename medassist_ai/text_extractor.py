"""
Best-effort recovery of an AssessmentResult from free-form model text.

Used when a provider ignores the JSON response format. Looks for labeled
sections (assessment, steps, warnings, severity/level, description), each
running until the next recognized label or the end of the text.
"""
import logging
import re
from typing import Optional

from .models import (
    SEVERITY_DESCRIPTIONS,
    AssessmentResult,
    Severity,
    normalize_severity_level,
)

logger = logging.getLogger(__name__)

UNPARSED_ASSESSMENT = "Unable to parse response properly. Please try again."
UNPARSED_WARNING = "The system encountered an issue processing the response."

LABELS = ("assessment", "steps", "warnings", "severity", "level", "description")

# Label may be wrapped in JSON quotes or markdown emphasis: "steps":, **Steps:**
_LABEL = re.compile(
    r"(?<![A-Za-z_])[\"'*_#]*\s*(" + "|".join(LABELS) + r")\s*[\"'*_]*\s*:",
    re.IGNORECASE,
)

# Numbered or bulleted list markers, only at line start or after punctuation
# so that "Call 911. Then" or "follow-up" are not split.
_ITEM_MARKER = re.compile(
    r"(?:^\s*|(?<=[.!?;:,])\s+)(?:\d{1,2}[.)]|[*•-])\s+"
)

_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')
_WRAPPING = "\"'[]{},*` \t\r\n"


def _find_sections(text: str) -> dict[str, str]:
    """Return the body of each recognized label; the first occurrence wins."""
    matches = list(_LABEL.finditer(text))
    sections: dict[str, str] = {}
    for i, match in enumerate(matches):
        label = match.group(1).lower()
        if label in sections:
            continue
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        sections[label] = text[match.end():end]
    return sections


def _clean(fragment: str) -> str:
    fragment = fragment.replace('\\"', '"').replace("\\n", " ")
    fragment = fragment.strip(_WRAPPING)
    return re.sub(r"\s+", " ", fragment).strip()


def _split_items(section: str) -> list[str]:
    """Split a steps/warnings section into individual items."""
    stripped = section.strip()
    if stripped.startswith("["):
        quoted = [_clean(q) for q in _QUOTED.findall(stripped)]
        quoted = [q for q in quoted if q]
        if quoted:
            return quoted

    items = []
    for line in stripped.splitlines():
        for piece in _ITEM_MARKER.split(line):
            piece = _clean(piece)
            if piece:
                items.append(piece)
    return items


def _extract_severity(sections: dict[str, str]) -> Severity:
    level_text: Optional[str] = None
    if "level" in sections:
        level_text = sections["level"]
    elif "severity" in sections:
        level_text = sections["severity"]

    if level_text is None:
        return Severity.undetermined()

    level = normalize_severity_level(_clean(level_text))
    description = _clean(sections.get("description", ""))
    return Severity(level=level, description=description or SEVERITY_DESCRIPTIONS[level])


def extract_structured_data(text: Optional[str]) -> AssessmentResult:
    """Recover an AssessmentResult from unstructured text. Never raises."""
    text = "" if text is None else str(text)
    sections = _find_sections(text)

    if not sections:
        logger.warning("No labeled sections found in provider response")
        return AssessmentResult(
            assessment=UNPARSED_ASSESSMENT,
            steps=[],
            warnings=[UNPARSED_WARNING],
            severity=Severity.undetermined(),
        )

    assessment = _clean(sections.get("assessment", "")) or UNPARSED_ASSESSMENT
    steps = _split_items(sections.get("steps", ""))
    warnings = _split_items(sections.get("warnings", ""))

    logger.info(
        f"Extracted from text: {len(steps)} steps, {len(warnings)} warnings, "
        f"labels={sorted(sections)}"
    )
    return AssessmentResult(
        assessment=assessment,
        steps=steps,
        warnings=warnings,
        severity=_extract_severity(sections),
    )
