"""
Pydantic models for first-aid guidance results and patient context.
"""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_ASSESSMENT = "Unable to provide assessment with given information."


class SeverityLevel(str, Enum):
    MINOR = "minor"
    REQUIRES_ATTENTION = "requires_attention"
    EMERGENCY = "emergency"


SEVERITY_DESCRIPTIONS = {
    SeverityLevel.MINOR: "This condition can be safely treated at home with basic first aid.",
    SeverityLevel.REQUIRES_ATTENTION: (
        "This condition needs medical attention, but is not immediately life-threatening."
    ),
    SeverityLevel.EMERGENCY: (
        "This is a medical emergency requiring immediate professional medical care."
    ),
}

UNDETERMINED_SEVERITY_DESCRIPTION = (
    "Unable to determine severity from the response. "
    "Seeking medical advice is recommended as a precaution."
)


def normalize_severity_level(text: Any) -> SeverityLevel:
    """Map free-form severity text onto one of the three levels.

    Anything unrecognized is treated as requires_attention.
    """
    if isinstance(text, SeverityLevel):
        return text
    lowered = str(text or "").lower().strip()
    if "minor" in lowered:
        return SeverityLevel.MINOR
    if (
        "requires_attention" in lowered
        or "requires attention" in lowered
        or "attention" in lowered
    ):
        return SeverityLevel.REQUIRES_ATTENTION
    if "emergency" in lowered:
        return SeverityLevel.EMERGENCY
    return SeverityLevel.REQUIRES_ATTENTION


def _as_string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        value = [value]
    items = []
    for item in value:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            items.append(text)
    return items


# --- Results ---

class Severity(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: SeverityLevel
    description: str

    @model_validator(mode="before")
    @classmethod
    def fill_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        level = normalize_severity_level(data.get("level"))
        description = str(data.get("description") or "").strip()
        return {
            "level": level,
            "description": description or SEVERITY_DESCRIPTIONS[level],
        }

    @classmethod
    def undetermined(cls) -> "Severity":
        return cls(
            level=SeverityLevel.REQUIRES_ATTENTION,
            description=UNDETERMINED_SEVERITY_DESCRIPTION,
        )


class AssessmentResult(BaseModel):
    """Structured first-aid guidance returned by every provider path."""

    model_config = ConfigDict(frozen=True)

    assessment: str
    steps: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    severity: Optional[Severity] = None

    @field_validator("steps", "warnings", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        return _as_string_list(v)

    @field_validator("severity", mode="before")
    @classmethod
    def coerce_severity(cls, v: Any) -> Any:
        if v is None or isinstance(v, Severity):
            return v
        if isinstance(v, dict):
            return {
                "level": v.get("level", ""),
                "description": str(v.get("description") or ""),
            }
        return {"level": v}

    @classmethod
    def from_payload(cls, data: dict) -> "AssessmentResult":
        """Build a result from a parsed provider JSON object, filling gaps."""
        assessment = data.get("assessment")
        if not isinstance(assessment, str) or not assessment.strip():
            assessment = DEFAULT_ASSESSMENT
        severity = data.get("severity") or Severity.undetermined()
        return cls(
            assessment=assessment.strip(),
            steps=data.get("steps"),
            warnings=data.get("warnings"),
            severity=severity,
        )

    def to_guidance_record(self, patient_id: int) -> "GuidanceRecord":
        return GuidanceRecord(
            patient_id=patient_id,
            assessment=self.assessment,
            steps=list(self.steps),
            warnings=list(self.warnings),
            severity=self.severity,
        )


class GuidanceRecord(BaseModel):
    """Shape handed to storage; the storage layer stamps the date."""

    model_config = ConfigDict(populate_by_name=True)

    patient_id: int = Field(alias="patientId")
    assessment: str
    steps: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    severity: Optional[Severity] = None


# --- Patient context ---

class MedicalHistory(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    allergies: list[str] = Field(default_factory=list)
    medications: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    blood_type: Optional[str] = Field(default=None, alias="bloodType")
    notes: Optional[str] = None

    @field_validator("allergies", "medications", "conditions", mode="before")
    @classmethod
    def coerce_list(cls, v: Any) -> list[str]:
        return _as_string_list(v)
