"""
Centralized LLM configuration for the standards pipeline.

Token limits, model choice and retry settings live here so the
extractor and the adapters agree on them.
"""
from dataclasses import dataclass, field

from teachplan.config.extraction_limits import CHUNK_TIMEOUT_SECONDS


@dataclass
class ExtractionConfig:
    """Configuration for a single extraction type."""
    max_tokens: int
    temperature: float = 0.05
    model_preference: str = "haiku"


@dataclass
class LLMSettings:
    """
    Centralized LLM settings for the standards extractor.

    Usage:
        from teachplan.core.extraction.llm_config import LLM_SETTINGS

        max_tokens = LLM_SETTINGS.standards_extraction.max_tokens
    """
    # Achievement standards from a PDF slice, image or text
    standards_extraction: ExtractionConfig = field(
        default_factory=lambda: ExtractionConfig(
            max_tokens=16000,
            temperature=0.05,
            model_preference="haiku",
        )
    )

    # Model IDs for Bedrock
    haiku_model_id: str = "us.anthropic.claude-haiku-4-5-20251001-v1:0"

    # Retry configuration
    max_retries: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0

    # Whole call budget, retries included
    call_timeout: float = CHUNK_TIMEOUT_SECONDS


# Global singleton instance
LLM_SETTINGS = LLMSettings()
