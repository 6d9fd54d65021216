"""
Text formatting of patient context for provider prompts.
"""
from typing import Optional

from .input_sanitization import sanitize_history_items, sanitize_notes, sanitize_text
from .models import MedicalHistory

HISTORY_HEADER = "PATIENT MEDICAL HISTORY (IMPORTANT - Consider for treatment recommendations):"
HISTORY_INSTRUCTIONS = (
    "Please tailor your first aid guidance taking into account these medical "
    "conditions, allergies, and medications. Warn about any potential "
    "complications based on the patient's medical history."
)


def _listed(label: str, items: list[str], empty: str) -> str:
    cleaned = sanitize_history_items(items)
    return f"{label}: {', '.join(cleaned)}" if cleaned else empty


def format_medical_history(history: MedicalHistory) -> str:
    """Render medical history as labeled lines.

    Every line is always present; empty fields get an explicit phrase so the
    model never sees a blank where it might assume nothing is known.
    """
    blood_type = sanitize_text(history.blood_type, max_length=10)
    notes = sanitize_notes(history.notes)
    return "\n".join([
        _listed("Allergies", history.allergies, "No known allergies"),
        _listed("Current medications", history.medications, "No current medications"),
        _listed("Medical conditions", history.conditions, "No chronic medical conditions"),
        f"Blood type: {blood_type or 'unknown'}",
        f"Additional medical notes: {notes or 'none'}",
    ])


def format_history_block(history: Optional[MedicalHistory]) -> str:
    """Full prompt block for the history, or an empty string without one."""
    if history is None:
        return ""
    return f"{HISTORY_HEADER}\n{format_medical_history(history)}\n\n{HISTORY_INSTRUCTIONS}"
