"""Abstract interfaces for external dependencies."""
from teachplan.core.ports.llm import LLMPort, ModelConfig, ContentPayload
from teachplan.core.ports.pdf import PDFPort

__all__ = [
    "LLMPort",
    "ModelConfig",
    "ContentPayload",
    "PDFPort",
]
