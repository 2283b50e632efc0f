"""Shared pytest fixtures."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from config.config_loader import AppConfig, DefaultsConfig, ModelConfig, PromptsConfig
from llmdebate.models import DebateSettings, ModelResponse, Round
from llmdebate.providers.base import AIProvider, ChunkCallback

CHALLENGER_INSTRUCTION = "You are the Challenger. Attack ruthlessly:"
DEFENDER_INSTRUCTION = "You are the Defender. Represent the user:"


@pytest.fixture
def sample_model_config() -> ModelConfig:
    return ModelConfig(
        name="test_model",
        sdk="test",
        model="test-model-1",
        api_key_env="TEST_API_KEY",
        timeout_sec=30,
        max_tokens=1024,
        base_url=None,
    )


@pytest.fixture
def sample_prompts_config() -> PromptsConfig:
    return PromptsConfig(
        challenger=CHALLENGER_INSTRUCTION,
        defender=DEFENDER_INSTRUCTION,
        summary="Summarize the debate: top blind spots, opportunities, deadly assumption.",
    )


@pytest.fixture
def sample_defaults_config() -> DefaultsConfig:
    return DefaultsConfig(
        provider="ollama",
        challenger_model="llama3",
        defender_model="llama3",
        rounds=2,
        max_history=100,
    )


@pytest.fixture
def sample_app_config(
    sample_defaults_config: DefaultsConfig,
    sample_prompts_config: PromptsConfig,
) -> AppConfig:
    model_cfg = ModelConfig(
        name="ollama",
        sdk="openai",
        model="llama3",
        timeout_sec=60,
        max_tokens=1024,
        base_url="http://localhost:11434/v1",
    )
    return AppConfig(
        defaults=sample_defaults_config,
        models={"ollama": model_cfg},
        prompts=sample_prompts_config,
        available_providers={"ollama"},
    )


@pytest.fixture
def sample_claim() -> str:
    return "Startup X should skip paid marketing"


@pytest.fixture
def sample_settings() -> DebateSettings:
    return DebateSettings(
        challenger_instruction=CHALLENGER_INSTRUCTION,
        defender_instruction=DEFENDER_INSTRUCTION,
        round_count=2,
        challenger_model="chal-model",
        defender_model="def-model",
        max_history=10,
    )


@pytest.fixture
def sample_rounds() -> list[Round]:
    return [
        Round(number=1, challenger="Organic growth is slow.", defender="Community compounds."),
        Round(number=2, challenger="Competitors will outspend you.", defender="CAC stays low."),
    ]


def make_response(content: str, model: str = "mock-model") -> ModelResponse:
    return ModelResponse(provider="mock", model=model, content=content, latency_sec=0.1, token_count=10)


class MockProvider(AIProvider):
    """Test double AIProvider."""

    def __init__(self, provider_name: str = "mock", response_content: str = "Mock response") -> None:
        self._name = provider_name
        self._response_content = response_content
        # Shadow the class method with an AsyncMock at the instance level.
        # ABC check passes because generate is defined in the class body below.
        self.generate = AsyncMock(  # type: ignore[assignment]
            return_value=ModelResponse(
                provider=provider_name,
                model="mock-model",
                content=response_content,
                latency_sec=0.1,
                token_count=10,
            )
        )

    def name(self) -> str:
        return self._name

    def model_string(self) -> str:
        return "mock-model"

    async def generate(  # type: ignore[override]
        self,
        instruction: str,
        prompt: str,
        model: str | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> ModelResponse:
        """Default implementation; replaced by AsyncMock in __init__."""
        return ModelResponse(
            provider=self._name,
            model=model or "mock-model",
            content=self._response_content,
            latency_sec=0.1,
            token_count=10,
        )


class ScriptedProvider(MockProvider):
    """Answers by role, numbering each reply, and records every call in order."""

    def __init__(self, provider_name: str = "scripted") -> None:
        super().__init__(provider_name)
        self.calls: list[dict] = []
        self.generate = AsyncMock(side_effect=self._respond)  # type: ignore[assignment]

    async def _respond(
        self,
        instruction: str,
        prompt: str,
        model: str | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> ModelResponse:
        role = "challenger" if instruction == CHALLENGER_INSTRUCTION else (
            "defender" if instruction == DEFENDER_INSTRUCTION else "other"
        )
        self.calls.append({"role": role, "instruction": instruction, "prompt": prompt, "model": model})
        count = sum(1 for c in self.calls if c["role"] == role)
        if on_chunk:
            on_chunk(f"{role} ")
        return make_response(f"{role} reply {count}", model or "mock-model")


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def scripted_provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def seed_file(tmp_path: Path, sample_claim: str) -> Path:
    path = tmp_path / "claim.md"
    path.write_text(sample_claim, encoding="utf-8")
    return path
