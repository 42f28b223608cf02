"""Domain models and entities.

Achievement standard records and grade levels.
"""

from teachplan.core.models.standard import (
    CandidateRecord,
    FinalRecord,
    GradeLevel,
)

__all__ = [
    "CandidateRecord",
    "FinalRecord",
    "GradeLevel",
]
