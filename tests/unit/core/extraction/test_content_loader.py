"""Tests for source document handling."""
import pytest
from teachplan.core.extraction.content_loader import SourceDocument, decode_text, detect_mime_type


class TestDetectMimeType:
    @pytest.mark.parametrize("filename,expected", [
        ("plan.pdf", "application/pdf"),
        ("PLAN.PDF", "application/pdf"),
        ("standards.txt", "text/plain"),
        ("scan.jpg", "image/jpeg"),
        ("scan.jpeg", "image/jpeg"),
        ("scan.png", "image/png"),
        ("notes.hwp", "application/pdf"),
        ("", "application/pdf"),
    ])
    def test_from_extension(self, filename, expected):
        assert detect_mime_type(filename) == expected

    def test_declared_type_wins(self):
        assert detect_mime_type("scan.pdf", "image/png") == "image/png"

    def test_declared_parameters_stripped(self):
        assert detect_mime_type("a.bin", "text/plain; charset=utf-8") == "text/plain"

    def test_generic_declaration_falls_back_to_extension(self):
        assert detect_mime_type("standards.txt", "application/octet-stream") == "text/plain"


class TestDecodeText:
    def test_utf8(self):
        assert decode_text("성취기준".encode("utf-8")) == "성취기준"

    def test_euc_kr_fallback(self):
        assert decode_text("지수법칙을 이해한다.".encode("cp949")) == "지수법칙을 이해한다."


class TestSourceDocument:
    def test_pdf_payload_is_inline(self):
        doc = SourceDocument.from_upload("plan.pdf", b"%PDF-1.7")
        payload = doc.to_payload()

        assert doc.is_pdf
        assert payload.mime_type == "application/pdf"
        assert payload.data == b"%PDF-1.7"
        assert payload.text is None

    def test_text_payload_is_decoded(self):
        doc = SourceDocument.from_upload("standards.txt", "한글".encode("cp949"), "text/plain")
        payload = doc.to_payload()

        assert not doc.is_pdf
        assert payload.is_text
        assert payload.text == "한글"

    def test_image_payload(self):
        payload = SourceDocument.from_upload("scan.png", b"\x89PNG").to_payload()
        assert payload.is_image
        assert payload.data == b"\x89PNG"
