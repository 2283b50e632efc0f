"""Gemini provider using google-genai SDK with native async streaming."""

import asyncio
import logging
import os
import time

from google import genai
from google.genai import types as genai_types

from config.config_loader import ModelConfig
from llmdebate.models import ModelResponse
from llmdebate.providers.base import AIProvider, ChunkCallback, ProviderError

logger = logging.getLogger(__name__)


class GeminiProvider(AIProvider):
    """Google Gemini provider via google-genai SDK."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        api_key = os.environ.get(config.api_key_env or "", "").strip()
        if not api_key:
            raise ProviderError(config.name, f"Missing API key: {config.api_key_env}")
        self._client = genai.Client(api_key=api_key)

    def name(self) -> str:
        return self._config.name

    def model_string(self) -> str:
        return self._config.model

    async def _stream(
        self,
        model: str,
        instruction: str,
        prompt: str,
        on_chunk: ChunkCallback | None,
    ) -> tuple[str, int | None]:
        parts: list[str] = []
        token_count: int | None = None
        stream = await self._client.aio.models.generate_content_stream(
            model=model,
            contents=prompt,
            config=genai_types.GenerateContentConfig(
                system_instruction=instruction,
                max_output_tokens=self._config.max_tokens,
                temperature=self._config.temperature,
                top_p=self._config.top_p,
            ),
        )
        async for chunk in stream:
            if chunk.usage_metadata:
                token_count = chunk.usage_metadata.total_token_count
            if chunk.text:
                parts.append(chunk.text)
                if on_chunk:
                    on_chunk(chunk.text)
        return "".join(parts), token_count

    async def generate(
        self,
        instruction: str,
        prompt: str,
        model: str | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> ModelResponse:
        model = model or self._config.model
        start = time.monotonic()
        try:
            content, token_count = await asyncio.wait_for(
                self._stream(model, instruction, prompt, on_chunk),
                timeout=self._config.timeout_sec,
            )
        except TimeoutError as exc:
            raise ProviderError(self._config.name, f"Request timed out after {self._config.timeout_sec}s") from exc
        except Exception as exc:
            raise ProviderError(self._config.name, f"API call failed: {exc}") from exc

        latency = time.monotonic() - start

        if not content.strip():
            raise ProviderError(self._config.name, "Empty response text")

        logger.info("Gemini (%s): %.2fs, %s tokens", model, latency, token_count)

        return ModelResponse(
            provider=self._config.name,
            model=model,
            content=content,
            latency_sec=latency,
            token_count=token_count,
        )
