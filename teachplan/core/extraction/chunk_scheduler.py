"""
ChunkScheduler - Page-chunked parallel extraction orchestration.

Handles:
- Partitioning selected pages into fixed-size chunks, in order
- Slicing one sub-document per chunk
- Launching every chunk extraction at once and joining on all of them
- Containing per-chunk failures as empty results

Chunk count stays small (curriculum excerpts, 3 pages per chunk),
so there is no concurrency cap.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from teachplan.config.extraction_limits import CHUNK_SIZE
from teachplan.core.models.standard import CandidateRecord
from teachplan.core.ports.llm import ContentPayload, PDF_MIME_TYPE
from teachplan.core.ports.pdf import PDFPort

logger = logging.getLogger(__name__)


@dataclass
class Chunk:
    """A group of page indices extracted in one call."""
    chunk_index: int
    pages: List[int]


@dataclass
class ChunkResult:
    """Result from extracting a single chunk."""
    chunk_index: int
    pages: List[int] = field(default_factory=list)
    records: List[CandidateRecord] = field(default_factory=list)
    attempted: bool = False
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class ScheduleResult:
    """Result from extracting all chunks."""
    chunk_results: List[ChunkResult] = field(default_factory=list)
    all_records: List[CandidateRecord] = field(default_factory=list)

    @property
    def total_chunks(self) -> int:
        return len(self.chunk_results)

    @property
    def attempted_chunks(self) -> int:
        return sum(1 for r in self.chunk_results if r.attempted)

    @property
    def failed_chunks(self) -> int:
        return sum(1 for r in self.chunk_results if r.failed)

    @property
    def all_failed(self) -> bool:
        """True when at least one chunk was attempted and none succeeded."""
        attempted = [r for r in self.chunk_results if r.attempted]
        return bool(attempted) and all(r.failed for r in attempted)


def partition(page_indices: Sequence[int], chunk_size: int = CHUNK_SIZE) -> List[Chunk]:
    """
    Split page indices into consecutive groups of at most chunk_size.

    Args:
        page_indices: Ordered page indices
        chunk_size: Maximum pages per chunk

    Returns:
        Chunks in input order; the last one may be smaller
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    pages = list(page_indices)
    return [
        Chunk(chunk_index=n, pages=pages[i:i + chunk_size])
        for n, i in enumerate(range(0, len(pages), chunk_size))
    ]


class ChunkScheduler:
    """
    Fan chunk extractions out to the extraction client and fan results back in.

    Usage:
        scheduler = ChunkScheduler(pdf=PyMuPDFAdapter(), extractor=extractor)
        result = await scheduler.run(pdf_bytes, [0, 2, 3, 4], instructions, schema)
    """

    def __init__(self, pdf: PDFPort, extractor: Any, chunk_size: int = CHUNK_SIZE):
        """
        Args:
            pdf: PDF adapter used to slice chunks
            extractor: Object with async extract(content, instructions, schema, label, chunk_index)
            chunk_size: Pages per chunk
        """
        self._pdf = pdf
        self._extractor = extractor
        self._chunk_size = chunk_size

    def schedule(self, page_indices: Sequence[int]) -> List[Chunk]:
        return partition(page_indices, self._chunk_size)

    async def run(
        self,
        document: bytes,
        page_indices: Sequence[int],
        instructions: str,
        schema: Dict[str, Any],
    ) -> ScheduleResult:
        """
        Extract all chunks concurrently and merge their records.

        Args:
            document: Source PDF bytes
            page_indices: Sorted zero-based pages to extract
            instructions: Extraction instructions shared by every chunk
            schema: Output schema shared by every chunk

        Returns:
            ScheduleResult with per-chunk outcomes and the merged record pool
        """
        chunks = self.schedule(page_indices)
        if not chunks:
            return ScheduleResult()

        logger.info(f"Split {len(page_indices)} pages into {len(chunks)} chunks")

        outcomes = await asyncio.gather(
            *[self._extract_chunk(document, chunk, instructions, schema) for chunk in chunks],
            return_exceptions=True,
        )

        result = ScheduleResult()
        for chunk, outcome in zip(chunks, outcomes):
            if isinstance(outcome, BaseException):
                # _extract_chunk contains its own errors; this is a safety net
                logger.error(f"Chunk {chunk.chunk_index} crashed: {outcome}")
                outcome = ChunkResult(
                    chunk_index=chunk.chunk_index,
                    pages=chunk.pages,
                    attempted=True,
                    error=str(outcome),
                )
            result.chunk_results.append(outcome)
            result.all_records.extend(outcome.records)

        logger.info(
            f"ChunkScheduler: {result.attempted_chunks - result.failed_chunks}/"
            f"{result.total_chunks} chunks succeeded, {len(result.all_records)} candidates"
        )
        return result

    async def _extract_chunk(
        self,
        document: bytes,
        chunk: Chunk,
        instructions: str,
        schema: Dict[str, Any],
    ) -> ChunkResult:
        """Slice and extract one chunk. Never raises."""
        result = ChunkResult(chunk_index=chunk.chunk_index, pages=chunk.pages)
        label = f"chunk {chunk.chunk_index + 1} (pages {[p + 1 for p in chunk.pages]})"

        try:
            sliced = self._pdf.slice_pages(document, chunk.pages)
        except Exception as e:
            logger.warning(f"Slicing failed for {label}: {e}")
            result.attempted = True
            result.error = str(e)
            return result

        if sliced is None:
            logger.debug(f"Nothing to extract for {label}")
            return result

        result.attempted = True
        try:
            result.records = await self._extractor.extract(
                ContentPayload.inline(sliced, PDF_MIME_TYPE),
                instructions,
                schema,
                label=label,
                chunk_index=chunk.chunk_index,
            )
        except Exception as e:
            result.error = str(e)
            logger.warning(f"{label} produced no records: {e}")

        return result
