"""Tests for recovering guidance from free-form provider text."""
from medassist_ai.models import SeverityLevel, UNDETERMINED_SEVERITY_DESCRIPTION
from medassist_ai.text_extractor import (
    UNPARSED_ASSESSMENT,
    UNPARSED_WARNING,
    extract_structured_data,
)


class TestLabeledSections:
    """Test extract_structured_data on labeled text."""

    def test_numbered_lists_on_one_line(self):
        text = (
            "assessment: Minor cut.\n"
            "steps: 1. Clean it. 2. Bandage it.\n"
            "warnings: 1. Watch for infection."
        )
        result = extract_structured_data(text)
        assert result.assessment == "Minor cut."
        assert result.steps == ["Clean it.", "Bandage it."]
        assert result.warnings == ["Watch for infection."]

    def test_missing_severity_is_conservative(self):
        result = extract_structured_data("assessment: Bruised knee.")
        assert result.severity.level == SeverityLevel.REQUIRES_ATTENTION
        assert result.severity.description == UNDETERMINED_SEVERITY_DESCRIPTION

    def test_bulleted_lists_across_lines(self):
        text = (
            "Assessment: Second-degree burn on the forearm.\n"
            "Steps:\n"
            "- Cool the burn under running water for 20 minutes\n"
            "- Cover loosely with cling film\n"
            "* Do not pop blisters\n"
            "Warnings:\n"
            "- Burn larger than the palm\n"
        )
        result = extract_structured_data(text)
        assert result.assessment == "Second-degree burn on the forearm."
        assert result.steps == [
            "Cool the burn under running water for 20 minutes",
            "Cover loosely with cling film",
            "Do not pop blisters",
        ]
        assert result.warnings == ["Burn larger than the palm"]

    def test_hyphenated_words_are_not_split(self):
        result = extract_structured_data("steps: 1. Arrange a follow-up visit.")
        assert result.steps == ["Arrange a follow-up visit."]

    def test_markdown_labels(self):
        text = "**Assessment:** Sprained ankle.\n**Steps:**\n1. Rest\n2. Ice"
        result = extract_structured_data(text)
        assert result.assessment == "Sprained ankle."
        assert result.steps == ["Rest", "Ice"]

    def test_missing_assessment_gets_fallback(self):
        result = extract_structured_data("steps: 1. Apply pressure.")
        assert result.assessment == UNPARSED_ASSESSMENT
        assert result.steps == ["Apply pressure."]
        assert result.warnings == []


class TestSeverityExtraction:
    """Test severity recovery from level/severity/description labels."""

    def test_level_and_description(self):
        text = (
            "assessment: Heavy bleeding.\n"
            "level: EMERGENCY\n"
            "description: Blood loss is severe."
        )
        result = extract_structured_data(text)
        assert result.severity.level == SeverityLevel.EMERGENCY
        assert result.severity.description == "Blood loss is severe."

    def test_severity_label_without_level(self):
        result = extract_structured_data("assessment: Scrape.\nseverity: minor")
        assert result.severity.level == SeverityLevel.MINOR
        assert result.severity.description

    def test_requires_attention_with_space(self):
        result = extract_structured_data("severity: Requires attention")
        assert result.severity.level == SeverityLevel.REQUIRES_ATTENTION

    def test_unrecognized_level_defaults_to_requires_attention(self):
        result = extract_structured_data("level: unclear")
        assert result.severity.level == SeverityLevel.REQUIRES_ATTENTION

    def test_broken_json_is_still_read(self):
        text = (
            '{"assessment": "Nosebleed", "steps": ["Lean forward", "Pinch the nose"], '
            '"warnings": ["Bleeding past 20 minutes"], '
            '"severity": {"level": "minor", "description": "Usually stops on its own"'
        )
        result = extract_structured_data(text)
        assert result.assessment == "Nosebleed"
        assert result.steps == ["Lean forward", "Pinch the nose"]
        assert result.warnings == ["Bleeding past 20 minutes"]
        assert result.severity.level == SeverityLevel.MINOR
        assert result.severity.description == "Usually stops on its own"


class TestUnparseableText:
    """Test the generic result when nothing is labeled."""

    def test_no_labels(self):
        result = extract_structured_data("I'm sorry, I can't help with that right now.")
        assert result.assessment == UNPARSED_ASSESSMENT
        assert result.steps == []
        assert result.warnings == [UNPARSED_WARNING]
        assert result.severity.level in set(SeverityLevel)

    def test_empty_and_none(self):
        for value in ("", None):
            result = extract_structured_data(value)
            assert result.assessment
            assert result.steps == []
            assert result.warnings
