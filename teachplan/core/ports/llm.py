"""LLM port interface.

Defines the contract for LLM providers. Core code depends only on this
abstraction, not on specific implementations like Bedrock.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

PDF_MIME_TYPE = "application/pdf"
TEXT_MIME_TYPE = "text/plain"


@dataclass
class ModelConfig:
    """Configuration for a specific model."""
    name: str           # e.g., "us.anthropic.claude-haiku-4-5-..."
    role: str           # e.g., "curriculum_extraction"
    max_tokens: int
    temperature: float
    timeout: float
    context_window: int
    system_prompt: str


@dataclass(frozen=True)
class ContentPayload:
    """Content submitted alongside extraction instructions.

    Either inline binary (a PDF slice or an image) with its media type,
    or plain text.
    """
    mime_type: str
    data: Optional[bytes] = None
    text: Optional[str] = None

    @classmethod
    def inline(cls, data: bytes, mime_type: str) -> "ContentPayload":
        return cls(mime_type=mime_type, data=data)

    @classmethod
    def plain_text(cls, text: str) -> "ContentPayload":
        return cls(mime_type=TEXT_MIME_TYPE, text=text)

    @property
    def is_text(self) -> bool:
        return self.text is not None

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


class LLMPort(ABC):
    """Abstract interface for LLM providers.

    Implementations: BedrockAdapter
    """

    @abstractmethod
    def get_model_config(self, model: str) -> ModelConfig:
        """Get configuration for a model.

        Args:
            model: Model key (e.g. "haiku")

        Returns:
            ModelConfig with all settings
        """
        pass

    @abstractmethod
    async def generate_with_content(
        self,
        prompt: str,
        content: ContentPayload,
        model: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        system: Optional[str] = None,
    ) -> str:
        """Generate completion from a document, image or text payload.

        Args:
            prompt: Instructions placed after the content
            content: Payload to analyze
            model: Model key
            max_tokens: Override config max_tokens
            temperature: Override config temperature
            system: Override config system_prompt

        Returns:
            Generated text response
        """
        pass
