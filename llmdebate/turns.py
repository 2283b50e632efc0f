"""Single generation step: render a context view, call a provider, record a Turn."""

import logging
from collections.abc import Iterable

from llmdebate.errors import GenerationFailure
from llmdebate.models import Role, Turn
from llmdebate.providers.base import AIProvider, ChunkCallback, ProviderError

logger = logging.getLogger(__name__)


def render_context(turns: Iterable[Turn]) -> str:
    """Render turns as "<role>: <content>" lines in window order."""
    return "\n".join(f"{turn.role.value}: {turn.content}" for turn in turns)


async def execute_turn(
    provider: AIProvider,
    role: Role,
    model: str | None,
    instruction: str,
    turns: Iterable[Turn],
    on_chunk: ChunkCallback | None = None,
) -> Turn:
    """Run one generation call and return its output as a Turn for role.

    The instruction and the rendered transcript are passed separately so the
    provider can send them as system and user content.

    Raises:
        GenerationFailure: If the provider errors or returns empty text.
    """
    prompt = render_context(turns)
    logger.debug("%s prompt (%d chars) via %s", role.value, len(prompt), provider.name())
    try:
        response = await provider.generate(instruction, prompt, model=model, on_chunk=on_chunk)
    except ProviderError as exc:
        raise GenerationFailure(role.value, str(exc)) from exc
    except Exception as exc:
        raise GenerationFailure(role.value, f"Unexpected error: {exc}") from exc

    if not response.content or not response.content.strip():
        raise GenerationFailure(role.value, f"{provider.name()} returned empty content")

    return Turn(role, response.content)
