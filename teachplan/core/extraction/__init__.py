"""Extraction engine and processors."""
from teachplan.core.extraction.engine import StandardsEngine, StandardsResult
from teachplan.core.extraction.chunk_scheduler import ChunkScheduler, partition
from teachplan.core.extraction.consolidator import ResultConsolidator
from teachplan.core.extraction.content_loader import SourceDocument
from teachplan.core.extraction.page_range import parse_page_range
from teachplan.core.extraction.prompt_loader import PromptLoader
from teachplan.core.extraction.response_parser import ResponseParser
from teachplan.core.extraction.sanitizer import sanitize_text
from teachplan.core.extraction.standard_extractor import StandardExtractor

__all__ = [
    "StandardsEngine",
    "StandardsResult",
    "ChunkScheduler",
    "partition",
    "ResultConsolidator",
    "SourceDocument",
    "parse_page_range",
    "PromptLoader",
    "ResponseParser",
    "sanitize_text",
    "StandardExtractor",
]
