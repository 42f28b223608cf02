"""
Achievement standard records.

CandidateRecord is the raw, possibly duplicated output of one extraction call.
FinalRecord is what survives consolidation and is handed to the plan table.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Mapping


class GradeLevel(str, Enum):
    """Middle-school grade the plan is written for."""
    GRADE_1 = "1"
    GRADE_2 = "2"
    GRADE_3 = "3"


# Model output key -> record attribute
_FIELD_ALIASES = {
    "unit": "unit",
    "standard": "standard",
    "element": "element",
    "teachingMethod": "teaching_method",
    "teaching_method": "teaching_method",
    "notes": "notes",
}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class CandidateRecord:
    """One unvalidated achievement standard as returned by the model."""

    unit: str = ""
    standard: str = ""
    element: str = ""
    teaching_method: str = ""
    notes: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateRecord":
        """Build from loosely-typed model output. Missing fields become ""."""
        values = {}
        for key, attr in _FIELD_ALIASES.items():
            if key in data and attr not in values:
                values[attr] = _as_text(data[key])
        return cls(**values)


@dataclass(frozen=True)
class FinalRecord:
    """A consolidated, sanitized standard with a generated identifier."""

    record_id: str
    unit: str = ""
    standard: str = ""
    element: str = ""
    teaching_method: str = ""
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Row shape consumed by the teaching-plan table."""
        return {
            "id": self.record_id,
            "unit": self.unit,
            "standard": self.standard,
            "element": self.element,
            "teachingMethod": self.teaching_method,
            "notes": self.notes,
            # Filled in by hand after import
            "method": [],
            "period": "",
            "hours": "",
            "remarks": "",
        }

    def to_candidate(self) -> CandidateRecord:
        data = asdict(self)
        data.pop("record_id")
        return CandidateRecord(**data)
