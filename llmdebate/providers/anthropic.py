"""Anthropic Claude provider using anthropic SDK with native async streaming."""

import asyncio
import logging
import os
import time

import anthropic as anthropic_sdk

from config.config_loader import ModelConfig
from llmdebate.models import ModelResponse
from llmdebate.providers.base import AIProvider, ChunkCallback, ProviderError

logger = logging.getLogger(__name__)


class AnthropicProvider(AIProvider):
    """Anthropic Claude provider via anthropic SDK."""

    def __init__(self, config: ModelConfig) -> None:
        self._config = config
        api_key = os.environ.get(config.api_key_env or "", "").strip()
        if not api_key:
            raise ProviderError(config.name, f"Missing API key: {config.api_key_env}")
        self._client = anthropic_sdk.AsyncAnthropic(api_key=api_key)

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
        async with self._client.messages.stream(
            model=model,
            max_tokens=self._config.max_tokens,
            temperature=self._config.temperature,
            system=instruction,
            messages=[{"role": "user", "content": prompt}],
        ) as stream:
            async for text in stream.text_stream:
                parts.append(text)
                if on_chunk:
                    on_chunk(text)
            message = await stream.get_final_message()

        token_count: int | None = None
        if message.usage:
            token_count = message.usage.input_tokens + message.usage.output_tokens
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

        logger.info("Anthropic (%s): %.2fs, %s tokens", model, latency, token_count)

        return ModelResponse(
            provider=self._config.name,
            model=model,
            content=content,
            latency_sec=latency,
            token_count=token_count,
        )
