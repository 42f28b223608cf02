"""
API Pydantic models for standards extraction.

Request fields arrive as multipart form data; these models describe
the responses.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class StandardRecord(BaseModel):
    """One row of the teaching-plan table."""

    id: str
    unit: str = Field("", description="단원명")
    standard: str = Field("", description="성취기준, code prepended when present")
    element: str = Field("", description="평가 요소")
    teachingMethod: str = Field("", description="수업 방법")
    notes: str = Field("", description="수업-평가 연계 주안점")
    method: List[str] = Field(default_factory=list, description="평가 방법, filled in after import")
    period: str = ""
    hours: str = ""
    remarks: str = ""


class ExtractionStats(BaseModel):
    """How the records were produced."""

    candidates: int = Field(0, description="Records returned by the model before consolidation")
    chunks: int = Field(0, description="Page chunks extracted")
    failed_chunks: int = Field(0, description="Chunks that produced no records due to errors")
    used_chunking: bool = False
    used_fallback: bool = Field(False, description="Whole document extracted after chunking setup failed")
    processing_time: float = 0.0


class StandardsResponse(BaseModel):
    """Response model for standards extraction"""

    subject: str
    grade: str
    count: int
    standards: List[StandardRecord] = Field(default_factory=list)
    stats: ExtractionStats
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    timestamp: datetime
    version: str
    uptime: float


__all__ = [
    "StandardRecord",
    "ExtractionStats",
    "StandardsResponse",
    "HealthResponse",
]
