"""Tests for result and patient-context models."""
import pytest
from pydantic import ValidationError

from medassist_ai.models import (
    DEFAULT_ASSESSMENT,
    SEVERITY_DESCRIPTIONS,
    AssessmentResult,
    MedicalHistory,
    Severity,
    SeverityLevel,
    normalize_severity_level,
)


class TestNormalizeSeverityLevel:
    """Test normalize_severity_level."""

    @pytest.mark.parametrize("text,expected", [
        ("minor", SeverityLevel.MINOR),
        ("MINOR injury", SeverityLevel.MINOR),
        ("requires_attention", SeverityLevel.REQUIRES_ATTENTION),
        ("Requires Attention", SeverityLevel.REQUIRES_ATTENTION),
        ("needs attention soon", SeverityLevel.REQUIRES_ATTENTION),
        ("Emergency", SeverityLevel.EMERGENCY),
        ("critical", SeverityLevel.REQUIRES_ATTENTION),
        ("", SeverityLevel.REQUIRES_ATTENTION),
        (None, SeverityLevel.REQUIRES_ATTENTION),
    ])
    def test_levels(self, text, expected):
        assert normalize_severity_level(text) == expected


class TestSeverity:
    """Test Severity validation."""

    def test_description_filled_from_level(self):
        severity = Severity(level="emergency", description="")
        assert severity.level == SeverityLevel.EMERGENCY
        assert severity.description == SEVERITY_DESCRIPTIONS[SeverityLevel.EMERGENCY]

    def test_undetermined(self):
        severity = Severity.undetermined()
        assert severity.level == SeverityLevel.REQUIRES_ATTENTION
        assert "Unable to determine severity" in severity.description

    def test_frozen(self):
        severity = Severity(level="minor", description="Small scrape")
        with pytest.raises(ValidationError):
            severity.level = SeverityLevel.EMERGENCY


class TestAssessmentResult:
    """Test AssessmentResult construction and defaults."""

    def test_from_payload_full(self):
        result = AssessmentResult.from_payload({
            "assessment": "Minor burn",
            "steps": ["Cool under water", "Cover loosely"],
            "warnings": ["Blistering over a large area"],
            "severity": {"level": "minor", "description": "Treat at home"},
        })
        assert result.assessment == "Minor burn"
        assert result.steps == ["Cool under water", "Cover loosely"]
        assert result.severity.level == SeverityLevel.MINOR
        assert result.severity.description == "Treat at home"

    def test_from_payload_missing_fields(self):
        result = AssessmentResult.from_payload({})
        assert result.assessment == DEFAULT_ASSESSMENT
        assert result.steps == []
        assert result.warnings == []
        assert result.severity.level == SeverityLevel.REQUIRES_ATTENTION

    def test_string_steps_become_list(self):
        result = AssessmentResult.from_payload({"assessment": "Cut", "steps": "Apply pressure"})
        assert result.steps == ["Apply pressure"]

    def test_blank_items_dropped(self):
        result = AssessmentResult(assessment="Cut", steps=["Rinse", "", None, "  "])
        assert result.steps == ["Rinse"]

    def test_severity_as_plain_string(self):
        result = AssessmentResult.from_payload({"assessment": "Chest pain", "severity": "emergency"})
        assert result.severity.level == SeverityLevel.EMERGENCY
        assert result.severity.description

    def test_unknown_level_is_conservative(self):
        result = AssessmentResult.from_payload({
            "assessment": "Headache",
            "severity": {"level": "moderate"},
        })
        assert result.severity.level == SeverityLevel.REQUIRES_ATTENTION

    def test_to_guidance_record(self):
        result = AssessmentResult.from_payload({
            "assessment": "Sprain",
            "steps": ["Rest"],
            "severity": {"level": "minor", "description": "Home care"},
        })
        record = result.to_guidance_record(patient_id=7)
        dumped = record.model_dump(by_alias=True)
        assert dumped["patientId"] == 7
        assert dumped["assessment"] == "Sprain"
        assert dumped["steps"] == ["Rest"]
        assert dumped["warnings"] == []
        assert dumped["severity"]["level"] == "minor"
        assert "date" not in dumped


class TestMedicalHistory:
    """Test MedicalHistory parsing."""

    def test_camel_case_alias(self):
        history = MedicalHistory.model_validate({
            "allergies": ["penicillin"],
            "bloodType": "O+",
        })
        assert history.blood_type == "O+"
        assert history.medications == []

    def test_snake_case_name(self):
        history = MedicalHistory(blood_type="A-")
        assert history.blood_type == "A-"

    def test_single_string_allergy(self):
        history = MedicalHistory(allergies="latex")
        assert history.allergies == ["latex"]
