"""
StandardExtractor - Extract candidate achievement standards via the LLM.

Submits one content payload (PDF slice, image or text) with the
extraction instructions and output schema, then parses the reply into
CandidateRecords. Throttling is retried with exponential backoff; the
whole call is bounded by a timeout. Any failure surfaces as
ChunkExtractionFailure so the scheduler can contain it.
"""
import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from teachplan.core.exceptions import ChunkExtractionFailure
from teachplan.core.models.standard import CandidateRecord
from teachplan.core.ports.llm import ContentPayload, LLMPort

from .llm_config import LLM_SETTINGS
from .response_parser import ResponseParser
from .retry_utils import RetryConfig, retry_with_backoff, with_timeout

logger = logging.getLogger(__name__)


class StandardExtractor:
    """Extract candidate standards from one payload."""

    def __init__(
        self,
        llm: LLMPort,
        system_prompt: str = "",
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        retry_config: Optional[RetryConfig] = None,
    ):
        self._llm = llm
        self._parser = ResponseParser(required_key="standard")
        self._retry_config = retry_config or RetryConfig.for_bedrock()

        config = LLM_SETTINGS.standards_extraction
        self._model = config.model_preference
        self._max_tokens = max_tokens or config.max_tokens
        self._temperature = temperature if temperature is not None else config.temperature
        self._timeout = timeout if timeout is not None else LLM_SETTINGS.call_timeout
        self._system_prompt = system_prompt or None

    async def extract(
        self,
        content: ContentPayload,
        instructions: str,
        schema: Dict[str, Any],
        label: str = "document",
        chunk_index: Optional[int] = None,
    ) -> List[CandidateRecord]:
        """
        Extract candidate records from one payload.

        Args:
            content: Document slice, image or text
            instructions: Rendered extraction instructions
            schema: JSON schema of the expected array
            label: Name used in log messages (e.g. "chunk 2")
            chunk_index: Chunk position, attached to failures

        Returns:
            Candidate records in the order the model returned them

        Raises:
            ChunkExtractionFailure: On LLM error, timeout or unparseable output
        """
        prompt = self._build_prompt(instructions, schema)

        try:
            response = await with_timeout(
                retry_with_backoff(
                    self._llm.generate_with_content,
                    prompt=prompt,
                    content=content,
                    model=self._model,
                    max_tokens=self._max_tokens,
                    temperature=self._temperature,
                    system=self._system_prompt,
                    max_retries=self._retry_config.max_retries,
                    base_delay=self._retry_config.base_delay,
                    max_delay=self._retry_config.max_delay,
                    exponential_base=self._retry_config.exponential_base,
                    jitter=self._retry_config.jitter,
                ),
                self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise ChunkExtractionFailure(
                f"Extraction of {label} timed out after {self._timeout:.0f}s",
                chunk_index=chunk_index,
            ) from e
        except Exception as e:
            raise ChunkExtractionFailure(
                f"Extraction of {label} failed: {e}", chunk_index=chunk_index
            ) from e

        if not response:
            logger.warning(f"Empty response from LLM for {label}")
            return []

        try:
            entries = self._parser.parse(response)
        except Exception as e:
            raise ChunkExtractionFailure(
                f"Extraction of {label} returned invalid JSON: {e}", chunk_index=chunk_index
            ) from e

        records = [CandidateRecord.from_dict(entry) for entry in entries]
        logger.info(f"Extracted {len(records)} candidate standards from {label}")
        return records

    def _build_prompt(self, instructions: str, schema: Dict[str, Any]) -> str:
        if not schema:
            return instructions
        rendered = json.dumps(schema, ensure_ascii=False, indent=2)
        return f"{instructions}\n\n**OUTPUT SCHEMA (JSON):**\n{rendered}"
