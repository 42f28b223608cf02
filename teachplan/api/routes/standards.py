"""Achievement-standard extraction routes"""
import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from teachplan.api.schemas import ExtractionStats, StandardRecord, StandardsResponse
from teachplan.core.exceptions import DocumentProcessingError, TotalExtractionFailure
from teachplan.core.extraction import SourceDocument, StandardsEngine
from teachplan.core.models import GradeLevel

logger = logging.getLogger(__name__)


def create_standards_router(
    engine: StandardsEngine,
    extracted_counter=None,
    failed_chunks_counter=None,
) -> APIRouter:
    """Create standards extraction router with dependency injection.

    Args:
        engine: StandardsEngine instance
        extracted_counter: Prometheus Counter for extracted standards
        failed_chunks_counter: Prometheus Counter for failed chunk extractions

    Returns:
        APIRouter configured with the extraction endpoint
    """
    router = APIRouter(tags=["Standards"])

    @router.post("/api/v1/standards/extract", response_model=StandardsResponse)
    async def extract_standards(
        file: UploadFile = File(...),
        subject: str = Form(...),
        grade: GradeLevel = Form(...),
        scope: Optional[str] = Form(None),
        page_range: Optional[str] = Form(None),
    ):
        """Extract achievement standards from a curriculum PDF, text file or image"""
        if not subject.strip():
            raise HTTPException(status_code=400, detail="Subject is required")

        data = await file.read()
        if not data:
            raise HTTPException(status_code=400, detail="Uploaded file is empty")

        document = SourceDocument.from_upload(file.filename, data, file.content_type)
        logger.info(
            f"Extracting standards: {document.filename} ({document.mime_type}, {len(data):,} bytes), "
            f"subject={subject}, grade={grade.value}, pages={page_range or 'all'}"
        )

        try:
            result = await engine.extract_standards(
                document,
                subject=subject.strip(),
                grade=grade,
                scope=scope,
                page_range=page_range,
            )
        except TotalExtractionFailure as e:
            logger.error(f"Standards extraction failed for {document.filename}: {e}")
            raise HTTPException(
                status_code=502,
                detail="No standards could be extracted; the extraction service failed. Please retry later.",
            )
        except DocumentProcessingError as e:
            logger.error(f"Unreadable document {document.filename}: {e}")
            raise HTTPException(status_code=400, detail=f"Could not read document: {e}")

        if extracted_counter is not None:
            extracted_counter.inc(len(result.records))
        if failed_chunks_counter is not None and result.failed_chunks:
            failed_chunks_counter.inc(result.failed_chunks)

        message = None
        if not result.records:
            message = "No standards found. Check the page range and subject name."

        return StandardsResponse(
            subject=subject.strip(),
            grade=grade.value,
            count=len(result.records),
            standards=[StandardRecord(**record.to_dict()) for record in result.records],
            stats=ExtractionStats(
                candidates=result.candidate_count,
                chunks=result.chunk_count,
                failed_chunks=result.failed_chunks,
                used_chunking=result.used_chunking,
                used_fallback=result.used_fallback,
                processing_time=result.processing_time,
            ),
            message=message,
        )

    return router
