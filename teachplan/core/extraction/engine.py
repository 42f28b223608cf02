"""
StandardsEngine - Orchestrator for achievement-standard extraction.

Delegates to:
- parse_page_range: page selection
- ChunkScheduler: per-chunk slicing and concurrent extraction
- StandardExtractor: one LLM call per payload
- ResultConsolidator: filtering, deduplication, sanitization

PDFs with a page range are chunked; everything else is a single call.
If the chunked path cannot be set up, the whole document is extracted
once instead.
"""
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from teachplan.config.extraction_limits import CHUNK_SIZE
from teachplan.core.exceptions import (
    ChunkExtractionFailure,
    DocumentProcessingError,
    TotalExtractionFailure,
)
from teachplan.core.models.standard import CandidateRecord, FinalRecord, GradeLevel
from teachplan.core.ports.llm import LLMPort
from teachplan.core.ports.pdf import PDFPort

from .chunk_scheduler import ChunkScheduler
from .consolidator import ResultConsolidator
from .content_loader import SourceDocument
from .page_range import parse_page_range
from .prompt_loader import PromptLoader, get_prompt_loader
from .standard_extractor import StandardExtractor

logger = logging.getLogger(__name__)


@dataclass
class StandardsResult:
    """Result container for one extraction request."""
    records: List[FinalRecord] = field(default_factory=list)
    candidate_count: int = 0
    chunk_count: int = 0
    failed_chunks: int = 0
    used_chunking: bool = False
    used_fallback: bool = False
    processing_time: float = 0.0


class StandardsEngine:
    """
    Extract achievement standards from an uploaded curriculum document.

    Usage:
        engine = StandardsEngine(llm=BedrockAdapter(), pdf=PyMuPDFAdapter())
        result = await engine.extract_standards(document, "수학", GradeLevel.GRADE_1,
                                                page_range="12-20")
    """

    def __init__(
        self,
        llm: LLMPort,
        pdf: PDFPort,
        chunk_size: int = CHUNK_SIZE,
        extractor: Optional[Any] = None,
        consolidator: Optional[ResultConsolidator] = None,
        prompt_loader: Optional[PromptLoader] = None,
    ):
        """Initialize engine with injected adapters.

        Args:
            llm: LLMPort implementation
            pdf: PDFPort implementation
            chunk_size: Pages per extraction chunk
            extractor: Override for the extraction client (tests)
            consolidator: Override for the consolidation policy
            prompt_loader: Override for instruction templates
        """
        self._llm = llm
        self._pdf = pdf
        self._prompts = prompt_loader or get_prompt_loader()
        self._extractor = extractor or StandardExtractor(
            llm, system_prompt=self._prompts.get_system_prompt()
        )
        self._scheduler = ChunkScheduler(pdf, self._extractor, chunk_size=chunk_size)
        self._consolidator = consolidator or ResultConsolidator()

    async def extract_standards(
        self,
        document: SourceDocument,
        subject: str,
        grade: Union[GradeLevel, str],
        scope: Optional[str] = None,
        page_range: Optional[str] = None,
    ) -> StandardsResult:
        """
        Run the full pipeline for one document.

        Args:
            document: Uploaded PDF, text or image
            subject: Subject whose standards are extracted
            grade: Grade level
            scope: Optional content-scope filter forwarded to the instructions
            page_range: Optional 1-based page expression, PDFs only

        Returns:
            StandardsResult; records may be empty when nothing was found

        Raises:
            TotalExtractionFailure: If every attempted extraction call failed
        """
        start = time.time()
        grade_value = grade.value if isinstance(grade, GradeLevel) else str(grade)
        instructions = self._prompts.build_standards_instructions(subject, grade_value, scope)
        schema = self._prompts.get_schema()

        result = StandardsResult()
        if document.is_pdf and page_range and page_range.strip():
            candidates = await self._extract_chunked(document, page_range, instructions, schema, result)
        else:
            candidates = await self._extract_whole(document, instructions, schema)

        result.candidate_count = len(candidates)
        result.records = self._consolidator.consolidate(candidates)
        result.processing_time = time.time() - start

        logger.info(
            f"StandardsEngine: {len(result.records)} standards for {subject} (grade {grade_value}) "
            f"from {result.candidate_count} candidates in {result.processing_time:.1f}s"
        )
        return result

    async def _extract_chunked(
        self,
        document: SourceDocument,
        page_range: str,
        instructions: str,
        schema: Dict[str, Any],
        result: StandardsResult,
    ) -> List[CandidateRecord]:
        try:
            total_pages = self._pdf.get_page_count(document.data)
        except DocumentProcessingError as e:
            logger.error(f"Chunking failed, falling back to full file: {e}")
            result.used_fallback = True
            return await self._extract_whole(document, instructions, schema)

        page_indices = parse_page_range(page_range, total_pages)
        if not page_indices:
            logger.warning(f"No valid pages in range {page_range!r} ({total_pages} pages)")
            return []

        result.used_chunking = True
        scheduled = await self._scheduler.run(document.data, page_indices, instructions, schema)
        result.chunk_count = scheduled.total_chunks
        result.failed_chunks = scheduled.failed_chunks

        if scheduled.all_failed:
            raise TotalExtractionFailure(
                f"All {scheduled.attempted_chunks} chunk extractions failed",
                attempted=scheduled.attempted_chunks,
            )
        return scheduled.all_records

    async def _extract_whole(
        self,
        document: SourceDocument,
        instructions: str,
        schema: Dict[str, Any],
    ) -> List[CandidateRecord]:
        """Single extraction call over the whole document."""
        try:
            return await self._extractor.extract(
                document.to_payload(), instructions, schema, label=document.filename or "document"
            )
        except ChunkExtractionFailure as e:
            logger.error(f"Whole-document extraction failed: {e}")
            raise TotalExtractionFailure(f"Extraction failed: {e}", attempted=1) from e
