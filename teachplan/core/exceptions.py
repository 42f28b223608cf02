"""Core domain exceptions.

All exceptions raised by core logic inherit from CoreError.
Adapters catch provider-specific errors and re-raise as these.
"""
from typing import Optional


class CoreError(Exception):
    """Base for all core domain errors."""
    pass


class LLMError(CoreError):
    """LLM operation failed after retries."""
    pass


class PDFError(CoreError):
    """PDF operation failed."""
    pass


class DocumentProcessingError(PDFError):
    """Source document could not be opened, sliced or re-encoded."""
    pass


class ExtractionError(CoreError):
    """Extraction logic failed."""
    pass


class ChunkExtractionFailure(ExtractionError):
    """A single extraction call produced no usable output.

    Contained by the scheduler; never aborts sibling chunks.
    """

    def __init__(self, message: str, chunk_index: Optional[int] = None):
        super().__init__(message)
        self.chunk_index = chunk_index


class TotalExtractionFailure(ExtractionError):
    """Every attempted extraction call failed.

    Distinguishes systemic failure from a genuine "nothing found".
    """

    def __init__(self, message: str, attempted: int = 0):
        super().__init__(message)
        self.attempted = attempted


class ValidationError(CoreError):
    """Data validation failed."""
    pass
