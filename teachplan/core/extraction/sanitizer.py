"""
Text sanitization for extracted fields.

Normalizes known transcription artifacts of the middle dot (·)
that appear in OCR'd and re-encoded Korean curriculum documents.
"""
from typing import Optional

MIDDLE_DOT = "\u00b7"

# Order matters: the two-character artifact first
MIDDLE_DOT_ARTIFACTS = (
    "\uc544\u1162",  # '아' + jungseong AE, mis-decoded middle dot
    "\uff65",      # halfwidth katakana middle dot
    "\u30fb",      # katakana middle dot
)


def sanitize_text(text: Optional[str]) -> str:
    """Replace middle-dot artifacts with the canonical middle dot.

    Returns "" for None or empty input.
    """
    if not text:
        return ""
    for artifact in MIDDLE_DOT_ARTIFACTS:
        text = text.replace(artifact, MIDDLE_DOT)
    return text
