"""Tests for StandardExtractor - single LLM extraction call."""
import asyncio
import json
import pytest
from unittest.mock import AsyncMock, MagicMock
from teachplan.core.exceptions import ChunkExtractionFailure, LLMError
from teachplan.core.extraction.retry_utils import RetryConfig
from teachplan.core.extraction.standard_extractor import StandardExtractor
from teachplan.core.models.standard import CandidateRecord
from teachplan.core.ports.llm import ContentPayload, LLMPort

SCHEMA = {"type": "array", "items": {"type": "object"}}


def make_llm(response=None, side_effect=None):
    llm = MagicMock(spec=LLMPort)
    llm.generate_with_content = AsyncMock(return_value=response, side_effect=side_effect)
    return llm


def make_extractor(llm, **kwargs):
    kwargs.setdefault("retry_config", RetryConfig.disabled())
    return StandardExtractor(llm, **kwargs)


def payload():
    return ContentPayload.inline(b"%PDF-1.7", "application/pdf")


class TestExtract:
    """Tests for StandardExtractor.extract."""

    @pytest.mark.asyncio
    async def test_parses_records(self):
        response = json.dumps([
            {"unit": "수와 연산", "standard": "[9수01-01] 소인수분해의 뜻을 안다.",
             "element": "소인수분해", "teachingMethod": "모둠 학습", "notes": "[도입] ..."},
        ], ensure_ascii=False)
        extractor = make_extractor(make_llm(response))

        records = await extractor.extract(payload(), "instructions", SCHEMA)

        assert records == [CandidateRecord(
            unit="수와 연산",
            standard="[9수01-01] 소인수분해의 뜻을 안다.",
            element="소인수분해",
            teaching_method="모둠 학습",
            notes="[도입] ...",
        )]

    @pytest.mark.asyncio
    async def test_passes_content_and_schema(self):
        llm = make_llm("[]")
        extractor = make_extractor(llm, system_prompt="system")
        content = payload()

        await extractor.extract(content, "extract standards", SCHEMA)

        kwargs = llm.generate_with_content.call_args.kwargs
        assert kwargs["content"] is content
        assert kwargs["system"] == "system"
        assert kwargs["prompt"].startswith("extract standards")
        assert '"type": "array"' in kwargs["prompt"]

    @pytest.mark.asyncio
    async def test_empty_schema_leaves_prompt_unchanged(self):
        llm = make_llm("[]")
        await make_extractor(llm).extract(payload(), "extract standards", {})
        assert llm.generate_with_content.call_args.kwargs["prompt"] == "extract standards"

    @pytest.mark.asyncio
    async def test_empty_response_yields_no_records(self):
        extractor = make_extractor(make_llm(""))
        assert await extractor.extract(payload(), "instructions", SCHEMA) == []

    @pytest.mark.asyncio
    async def test_wrapped_and_fenced_response(self):
        response = '```json\n{"standards": [{"standard": "[9수01-01] 안다."}]}\n```'
        extractor = make_extractor(make_llm(response))

        records = await extractor.extract(payload(), "instructions", SCHEMA)

        assert [r.standard for r in records] == ["[9수01-01] 안다."]

    @pytest.mark.asyncio
    async def test_invalid_json_raises_chunk_failure(self):
        extractor = make_extractor(make_llm("I could not find any standards."))
        with pytest.raises(ChunkExtractionFailure, match="invalid JSON"):
            await extractor.extract(payload(), "instructions", SCHEMA, label="chunk 3")

    @pytest.mark.asyncio
    async def test_llm_error_raises_chunk_failure(self):
        extractor = make_extractor(make_llm(side_effect=LLMError("Bedrock invoke failed: boom")))

        with pytest.raises(ChunkExtractionFailure) as exc_info:
            await extractor.extract(payload(), "instructions", SCHEMA, label="chunk 1")

        assert "chunk 1" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, LLMError)

    @pytest.mark.asyncio
    async def test_timeout_raises_chunk_failure(self):
        async def slow(**kwargs):
            await asyncio.sleep(5)
            return "[]"

        llm = MagicMock(spec=LLMPort)
        llm.generate_with_content = slow
        extractor = make_extractor(llm, timeout=0.01)

        with pytest.raises(ChunkExtractionFailure, match="timed out"):
            await extractor.extract(payload(), "instructions", SCHEMA)

    @pytest.mark.asyncio
    async def test_throttling_is_retried(self):
        llm = make_llm(side_effect=[LLMError("ThrottlingException: slow down"), "[]"])
        extractor = make_extractor(
            llm, retry_config=RetryConfig(max_retries=2, base_delay=0.0, jitter=False)
        )

        assert await extractor.extract(payload(), "instructions", SCHEMA) == []
        assert llm.generate_with_content.await_count == 2

    @pytest.mark.asyncio
    async def test_failure_carries_chunk_index(self):
        extractor = make_extractor(make_llm(side_effect=LLMError("boom")))

        with pytest.raises(ChunkExtractionFailure) as exc_info:
            await extractor.extract(payload(), "instructions", SCHEMA, label="chunk 3", chunk_index=2)

        assert exc_info.value.chunk_index == 2

    @pytest.mark.asyncio
    async def test_zero_temperature_passed_through(self):
        llm = make_llm("[]")
        await make_extractor(llm, temperature=0.0).extract(payload(), "instructions", SCHEMA)
        assert llm.generate_with_content.call_args.kwargs["temperature"] == 0.0
