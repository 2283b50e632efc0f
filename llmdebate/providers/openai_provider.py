"""OpenAI provider using openai SDK with native async streaming.

Also serves OpenAI-compatible endpoints (ollama, xAI) through base_url.
"""

import asyncio
import logging
import os
import time

from openai import AsyncOpenAI

from config.config_loader import ModelConfig
from llmdebate.models import ModelResponse
from llmdebate.providers.base import AIProvider, ChunkCallback, ProviderError

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """OpenAI provider via openai SDK."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        self._client = AsyncOpenAI(api_key=self._api_key(config), base_url=config.base_url)

    def _api_key(self, config: ModelConfig) -> str:
        api_key = os.environ.get(config.api_key_env or "", "").strip()
        if not api_key:
            raise ProviderError(config.name, f"Missing API key: {config.api_key_env}")
        return api_key

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
        stream = await self._client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": instruction},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
            top_p=self._config.top_p,
            stream=True,
        )
        parts: list[str] = []
        token_count: int | None = None
        async for chunk in stream:
            if getattr(chunk, "usage", None):
                token_count = chunk.usage.total_tokens
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                parts.append(delta)
                if on_chunk:
                    on_chunk(delta)
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
            raise ProviderError(self._config.name, "Empty response content")

        logger.info("%s (%s): %.2fs, %s tokens", self._config.name, model, latency, token_count)

        return ModelResponse(
            provider=self._config.name,
            model=model,
            content=content,
            latency_sec=latency,
            token_count=token_count,
        )
