"""Abstract base for all text-generation providers."""

from abc import ABC, abstractmethod
from collections.abc import Callable

from llmdebate.models import ModelResponse

ChunkCallback = Callable[[str], None]


class ProviderError(Exception):
    """Raised when a provider call fails."""

    def __init__(self, provider_name: str, message: str) -> None:
        self.provider_name = provider_name
        super().__init__(f"[{provider_name}] {message}")


class AIProvider(ABC):
    """Abstract base for all text-generation providers."""

    @abstractmethod
    def name(self) -> str:
        """Return the short provider name (e.g. 'ollama', 'claude')."""
        ...

    @abstractmethod
    def model_string(self) -> str:
        """Return the default model identifier string."""
        ...

    @abstractmethod
    async def generate(
        self,
        instruction: str,
        prompt: str,
        model: str | None = None,
        on_chunk: ChunkCallback | None = None,
    ) -> ModelResponse:
        """Generate a response for the given instruction and prompt.

        Args:
            instruction: Role instruction, sent as system content.
            prompt: Rendered context transcript, sent as user content.
            model: Model identifier; None uses the configured default.
            on_chunk: Optional callback receiving each streamed text delta.
                Progress reporting only; the return value is authoritative.

        Returns:
            ModelResponse dataclass with the assembled content and metadata.

        Raises:
            ProviderError: On API failure, timeout, or empty response.
        """
        ...
