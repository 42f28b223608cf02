"""Tests for standards extraction routes"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient
from teachplan.api.app import create_app
from teachplan.core.exceptions import DocumentProcessingError, TotalExtractionFailure
from teachplan.core.extraction import StandardsEngine, StandardsResult
from teachplan.core.models import FinalRecord, GradeLevel


def make_client(result=None, side_effect=None):
    engine = MagicMock(spec=StandardsEngine)
    engine.extract_standards = AsyncMock(return_value=result, side_effect=side_effect)
    return TestClient(create_app(engine=engine)), engine


def upload(client, data=b"%PDF-1.7", filename="plan.pdf", content_type="application/pdf", **form):
    fields = {"subject": "수학", "grade": "1"}
    fields.update(form)
    return client.post(
        "/api/v1/standards/extract",
        files={"file": (filename, data, content_type)},
        data=fields,
    )


class TestExtractStandards:
    """POST /api/v1/standards/extract"""

    def test_returns_records(self):
        result = StandardsResult(
            records=[FinalRecord(record_id="file-gen-1", standard="[9수01-01] 지수법칙을 이해한다.",
                                 teaching_method="탐구 학습")],
            candidate_count=3,
            chunk_count=1,
            used_chunking=True,
        )
        client, engine = make_client(result)

        response = upload(client, page_range="1-3", scope="지수")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["grade"] == "1"
        assert data["message"] is None
        assert data["standards"][0]["id"] == "file-gen-1"
        assert data["standards"][0]["teachingMethod"] == "탐구 학습"
        assert data["standards"][0]["method"] == []
        assert data["stats"]["candidates"] == 3
        assert data["stats"]["used_chunking"] is True

        document = engine.extract_standards.call_args.args[0]
        kwargs = engine.extract_standards.call_args.kwargs
        assert document.is_pdf
        assert kwargs["subject"] == "수학"
        assert kwargs["grade"] is GradeLevel.GRADE_1
        assert kwargs["scope"] == "지수"
        assert kwargs["page_range"] == "1-3"

    def test_no_records_carries_message(self):
        client, _ = make_client(StandardsResult())

        response = upload(client)

        assert response.status_code == 200
        assert response.json()["count"] == 0
        assert "No standards found" in response.json()["message"]

    def test_text_upload_detected(self):
        client, engine = make_client(StandardsResult())

        upload(client, data="성취기준".encode("utf-8"), filename="list.txt",
               content_type="application/octet-stream")

        document = engine.extract_standards.call_args.args[0]
        assert document.mime_type == "text/plain"

    def test_total_failure_is_bad_gateway(self):
        client, _ = make_client(side_effect=TotalExtractionFailure("all failed", attempted=2))
        assert upload(client, page_range="1-6").status_code == 502

    def test_unreadable_document_is_bad_request(self):
        client, _ = make_client(side_effect=DocumentProcessingError("broken"))
        assert upload(client).status_code == 400

    def test_empty_file_rejected(self):
        client, engine = make_client(StandardsResult())

        assert upload(client, data=b"").status_code == 400
        engine.extract_standards.assert_not_called()

    def test_blank_subject_rejected(self):
        client, _ = make_client(StandardsResult())
        assert upload(client, subject="   ").status_code == 400

    @pytest.mark.parametrize("grade", ["4", "first"])
    def test_invalid_grade_rejected(self, grade):
        client, _ = make_client(StandardsResult())
        assert upload(client, grade=grade).status_code == 422


class TestRoot:
    def test_root(self):
        client, _ = make_client(StandardsResult())
        assert client.get("/").json()["status"] == "operational"
