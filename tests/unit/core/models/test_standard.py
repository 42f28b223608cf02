"""Tests for achievement standard records."""
from dataclasses import FrozenInstanceError

import pytest
from teachplan.core.models.standard import CandidateRecord, FinalRecord, GradeLevel


class TestGradeLevel:
    def test_values(self):
        assert [g.value for g in GradeLevel] == ["1", "2", "3"]

    def test_from_value(self):
        assert GradeLevel("2") is GradeLevel.GRADE_2

    def test_invalid_value(self):
        with pytest.raises(ValueError):
            GradeLevel("4")


class TestCandidateRecord:
    def test_defaults_empty(self):
        record = CandidateRecord()
        assert record.unit == record.standard == record.notes == ""

    def test_from_dict_camel_case(self):
        record = CandidateRecord.from_dict({
            "unit": "수와 연산",
            "standard": "[9수01-01] 소인수분해의 뜻을 안다.",
            "element": "소인수분해",
            "teachingMethod": "모둠 학습",
            "notes": "[도입] 복습",
        })
        assert record.teaching_method == "모둠 학습"
        assert record.element == "소인수분해"

    def test_from_dict_snake_case(self):
        assert CandidateRecord.from_dict({"teaching_method": "토의"}).teaching_method == "토의"

    def test_from_dict_loose_values(self):
        record = CandidateRecord.from_dict({"standard": None, "unit": 3, "extra": "ignored"})
        assert record.standard == ""
        assert record.unit == "3"

    def test_immutable(self):
        record = CandidateRecord(standard="a")
        with pytest.raises(FrozenInstanceError):
            record.standard = "b"


class TestFinalRecord:
    def test_to_dict_row_shape(self):
        record = FinalRecord(
            record_id="file-gen-1",
            unit="수와 연산",
            standard="[9수01-01] 소인수분해의 뜻을 안다.",
            teaching_method="모둠 학습",
        )
        assert record.to_dict() == {
            "id": "file-gen-1",
            "unit": "수와 연산",
            "standard": "[9수01-01] 소인수분해의 뜻을 안다.",
            "element": "",
            "teachingMethod": "모둠 학습",
            "notes": "",
            "method": [],
            "period": "",
            "hours": "",
            "remarks": "",
        }

    def test_to_candidate(self):
        record = FinalRecord(record_id="x", standard="s", notes="n")
        assert record.to_candidate() == CandidateRecord(standard="s", notes="n")
