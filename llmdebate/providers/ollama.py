"""Local Ollama provider through its OpenAI-compatible /v1 endpoint."""

import dataclasses
import os

from config.config_loader import ModelConfig
from llmdebate.providers.openai_provider import OpenAIProvider

_DEFAULT_BASE_URL = "http://localhost:11434/v1"


class OllamaProvider(OpenAIProvider):
    """Ollama provider. No API key; OLLAMA_HOST overrides the configured URL."""

    def __init__(self, config: ModelConfig) -> None:
        host = os.environ.get("OLLAMA_HOST", "").strip()
        if host:
            if not host.startswith(("http://", "https://")):
                host = f"http://{host}"
            config = dataclasses.replace(config, base_url=host.rstrip("/") + "/v1")
        elif not config.base_url:
            config = dataclasses.replace(config, base_url=_DEFAULT_BASE_URL)
        super().__init__(config)

    def _api_key(self, config: ModelConfig) -> str:
        # The endpoint ignores the key but the SDK requires one.
        return "ollama"
