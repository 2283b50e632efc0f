"""Pure dataclasses for the debate pipeline. No I/O, no provider deps."""

from dataclasses import dataclass
from enum import Enum

from llmdebate.errors import ConfigurationError


class Role(str, Enum):
    SEED = "seed"
    CHALLENGER = "challenger"
    DEFENDER = "defender"
    SUMMARY = "summary"


@dataclass(frozen=True)
class Turn:
    role: Role
    content: str


@dataclass(frozen=True)
class Round:
    number: int            # 1-indexed
    challenger: str
    defender: str


@dataclass
class ModelResponse:
    provider: str          # "ollama", "openai", "claude", "gemini", "grok"
    model: str             # actual model string used
    content: str
    latency_sec: float
    token_count: int | None = None


@dataclass
class DebateSettings:
    """Per-run debate configuration.

    round_count and budget are mutually exclusive. With neither set the
    debate runs until the caller cancels it.
    """

    challenger_instruction: str
    defender_instruction: str
    round_count: int | None = None
    budget: str | None = None          # wall-clock budget, e.g. "2m", "1h30m"
    challenger_model: str | None = None
    defender_model: str | None = None
    max_history: int = 100             # non-seed turns visible to each call

    @property
    def unbounded(self) -> bool:
        return not self.round_count and not self.budget

    def validate(self) -> None:
        if self.round_count and self.budget:
            raise ConfigurationError("--rounds and --duration cannot be used together")
        if self.round_count is not None and self.round_count < 0:
            raise ConfigurationError(f"Round count must be >= 0, got {self.round_count}")
        if self.max_history < 1:
            raise ConfigurationError(f"History capacity must be >= 1, got {self.max_history}")


@dataclass
class DebateResult:
    claim: str
    rounds: list[Round]
    summary: str
    summarizer_model: str
    total_duration_sec: float
    source: str = "cli"
    estimated_rounds: bool = False
