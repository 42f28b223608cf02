"""
Source document handling.

Resolves the media type of an upload and turns it into the payload
sent to the model: decoded text for .txt files, inline bytes otherwise.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from teachplan.core.ports.llm import ContentPayload, PDF_MIME_TYPE, TEXT_MIME_TYPE

logger = logging.getLogger(__name__)

_EXTENSION_MIME_TYPES = (
    (".pdf", PDF_MIME_TYPE),
    (".txt", TEXT_MIME_TYPE),
    (".jpg", "image/jpeg"),
    (".jpeg", "image/jpeg"),
    (".png", "image/png"),
)

# Declared types that say nothing about the content
_GENERIC_MIME_TYPES = {"", "application/octet-stream"}

# Korean text files predating UTF-8 are usually EUC-KR (CP949 superset)
_LEGACY_TEXT_ENCODING = "cp949"


def detect_mime_type(filename: str, declared: Optional[str] = None) -> str:
    """Media type of an upload, from its declaration or its extension.

    Unknown extensions are treated as PDF.
    """
    if declared:
        declared = declared.split(";")[0].strip().lower()
        if declared not in _GENERIC_MIME_TYPES:
            return declared

    name = (filename or "").lower()
    for extension, mime_type in _EXTENSION_MIME_TYPES:
        if name.endswith(extension):
            return mime_type
    return PDF_MIME_TYPE


def decode_text(data: bytes) -> str:
    """Decode a text upload, UTF-8 first, then the legacy Korean encoding."""
    try:
        text = data.decode("utf-8")
        if "\ufffd" not in text:
            return text
    except UnicodeDecodeError:
        pass
    logger.info("Text file is not clean UTF-8, decoding as EUC-KR")
    return data.decode(_LEGACY_TEXT_ENCODING, errors="replace")


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded curriculum document."""
    filename: str
    data: bytes
    mime_type: str

    @classmethod
    def from_upload(
        cls,
        filename: str,
        data: bytes,
        declared_type: Optional[str] = None,
    ) -> "SourceDocument":
        return cls(
            filename=filename or "",
            data=data,
            mime_type=detect_mime_type(filename, declared_type),
        )

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    def to_payload(self) -> ContentPayload:
        """Whole-document payload."""
        if self.mime_type == TEXT_MIME_TYPE:
            return ContentPayload.plain_text(decode_text(self.data))
        return ContentPayload.inline(self.data, self.mime_type)
