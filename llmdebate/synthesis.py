"""Final synthesis: serialize every round and reduce it in one generation call."""

import logging

from llmdebate.models import Role, Round, Turn
from llmdebate.providers.base import AIProvider, ChunkCallback
from llmdebate.turns import execute_turn

logger = logging.getLogger(__name__)

SUMMARY_INSTRUCTION = "Summarize the debate: top blind spots, opportunities, deadly assumption."


def format_transcript(rounds: list[Round]) -> str:
    """Format all rounds into a single transcript string for synthesis."""
    parts = [
        f"### Round {index}\nChallenger: {rnd.challenger}\nDefender: {rnd.defender}\n"
        for index, rnd in enumerate(rounds, start=1)
    ]
    return "\n".join(parts)


async def summarize(
    rounds: list[Round],
    provider: AIProvider,
    model: str | None,
    instruction: str = SUMMARY_INSTRUCTION,
    on_chunk: ChunkCallback | None = None,
) -> str:
    """Summarize the whole transcript with exactly one generation call.

    Raises:
        GenerationFailure: If the call fails or returns empty text.
    """
    transcript = format_transcript(rounds)
    logger.info("Running synthesis over %d rounds via %s", len(rounds), provider.name())

    turn = await execute_turn(
        provider,
        Role.SUMMARY,
        model,
        instruction,
        [Turn(Role.SUMMARY, transcript)],
        on_chunk=on_chunk,
    )
    return turn.content
