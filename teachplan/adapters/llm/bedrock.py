"""Bedrock LLM adapter.

Implements LLMPort interface by directly using boto3. Credentials come
from the boto3 session passed in (or the default credential chain);
the core never looks them up itself.
"""
import asyncio
import base64
import json
import logging
import time
from typing import Any, Dict, List, Optional

import boto3
from botocore.config import Config

from teachplan.core.extraction.llm_config import LLM_SETTINGS
from teachplan.core.ports.llm import ContentPayload, LLMPort, ModelConfig
from teachplan.core.exceptions import LLMError

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = "You are an expert Korean curriculum analyst."


class BedrockAdapter(LLMPort):
    """AWS Bedrock implementation of LLMPort.

    Directly uses boto3 bedrock-runtime client with the Anthropic
    messages format. PDFs go in as document blocks, images as image
    blocks, text as a leading text block.
    """

    # Model configurations
    _MODEL_CONFIGS = {
        "haiku": ModelConfig(
            name=LLM_SETTINGS.haiku_model_id,
            role="curriculum_extraction",
            max_tokens=65536,
            temperature=0.1,
            timeout=120.0,
            context_window=200000,
            system_prompt=_SYSTEM_PROMPT,
        ),
    }

    def __init__(
        self,
        region: str = "us-east-1",
        session: Optional[boto3.Session] = None,
        read_timeout: int = 180,
    ):
        """Initialize adapter with boto3 client.

        Args:
            region: AWS region for Bedrock service
            session: boto3 session carrying credentials (default chain if None)
            read_timeout: Socket read timeout in seconds
        """
        session = session or boto3.Session()
        boto_config = Config(read_timeout=read_timeout, connect_timeout=10)
        self._client = session.client("bedrock-runtime", region_name=region, config=boto_config)

    def get_model_config(self, model: str) -> ModelConfig:
        """Get configuration for a model."""
        if model not in self._MODEL_CONFIGS:
            raise LLMError(f"Unknown model: {model}. Available: {list(self._MODEL_CONFIGS.keys())}")
        return self._MODEL_CONFIGS[model]

    async def generate_with_content(
        self,
        prompt: str,
        content: ContentPayload,
        model: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        system: Optional[str] = None,
    ) -> str:
        """Generate completion from a document, image or text payload via Bedrock."""
        blocks = [self._content_block(content), {"type": "text", "text": prompt}]
        return await self._invoke(blocks, model, max_tokens, temperature, system)

    def _content_block(self, content: ContentPayload) -> Dict[str, Any]:
        if content.is_text:
            return {"type": "text", "text": content.text}

        data = base64.b64encode(content.data or b"").decode("utf-8")
        if content.is_pdf:
            return {
                "type": "document",
                "source": {"type": "base64", "media_type": content.mime_type, "data": data},
            }
        if content.is_image:
            return {
                "type": "image",
                "source": {"type": "base64", "media_type": content.mime_type, "data": data},
            }
        raise LLMError(f"Unsupported content type: {content.mime_type}")

    async def _invoke(
        self,
        content: List[Dict[str, Any]],
        model: str,
        max_tokens: Optional[int],
        temperature: Optional[float],
        system: Optional[str],
    ) -> str:
        config = self.get_model_config(model)
        start_time = time.time()

        request_body = {
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": max_tokens or config.max_tokens,
            "temperature": temperature if temperature is not None else config.temperature,
            "messages": [{"role": "user", "content": content}],
        }

        if system or config.system_prompt:
            request_body["system"] = system or config.system_prompt

        try:
            # Bedrock is sync, run in executor for async compatibility
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self._client.invoke_model(
                    modelId=config.name,
                    body=json.dumps(request_body)
                ),
            )

            response_body = json.loads(response["body"].read())
            text = "".join(
                block.get("text", "")
                for block in response_body.get("content", [])
                if block.get("type", "text") == "text"
            )
        except Exception as e:
            logger.error(f"Bedrock invoke failed: {e}")
            raise LLMError(f"Bedrock invoke failed: {e}") from e

        usage = response_body.get("usage", {})
        logger.info(
            f"Bedrock {model}: {usage.get('input_tokens', 0)} in / "
            f"{usage.get('output_tokens', 0)} out tokens in {time.time() - start_time:.1f}s"
        )
        return text
