"""Debate orchestration: alternating Challenger/Defender turns over a shared window."""

import itertools
import logging
from collections.abc import Callable, Iterator

from llmdebate.context import ContextWindow
from llmdebate.errors import ConfigurationError
from llmdebate.models import DebateSettings, Role, Round, Turn
from llmdebate.providers.base import AIProvider, ChunkCallback
from llmdebate.turns import execute_turn

logger = logging.getLogger(__name__)


def _round_numbers(settings: DebateSettings) -> Iterator[int]:
    if settings.round_count:
        return iter(range(1, settings.round_count + 1))
    return itertools.count(1)


async def run_debate(
    claim: str,
    challenger: AIProvider,
    defender: AIProvider,
    settings: DebateSettings,
    on_turn: Callable[[int, Turn], None] | None = None,
    on_round_complete: Callable[[Round], None] | None = None,
    on_chunk: ChunkCallback | None = None,
) -> list[Round]:
    """Run the debate for settings.round_count rounds.

    Each round the Challenger answers the trimmed window, its turn is
    appended, then the Defender answers the re-trimmed window (which now
    holds the Challenger's turn). A round is recorded only after both turns
    succeed. With no round count the loop runs until the task is cancelled.

    Args:
        claim: Seed claim, pinned at the head of every context view.
        challenger: Provider for the Challenger role.
        defender: Provider for the Defender role (may be the same object).
        settings: Round count, per-role models/instructions, history capacity.
        on_turn: Optional callback invoked with (round_number, turn) per turn.
        on_round_complete: Optional callback invoked after each full round.
        on_chunk: Optional streaming callback forwarded to every provider call.

    Returns:
        List of Round objects, one per round.

    Raises:
        ConfigurationError: If settings are inconsistent.
        GenerationFailure: If any turn fails; completed rounds are discarded.
    """
    settings.validate()
    if settings.budget and not settings.round_count:
        raise ConfigurationError("A wall-clock budget must be converted to a round count before the debate starts")

    window = ContextWindow(claim)
    view_size = settings.max_history + 1
    rounds: list[Round] = []

    logger.info("Starting debate with claim: %s", claim)

    for round_num in _round_numbers(settings):
        logger.debug("Round %d: %d turns in history", round_num, len(window))

        chal = await execute_turn(
            challenger,
            Role.CHALLENGER,
            settings.challenger_model,
            settings.challenger_instruction,
            window.trimmed(view_size),
            on_chunk=on_chunk,
        )
        window.append(chal)
        logger.info("Challenger responded: %s", chal.content)
        if on_turn:
            on_turn(round_num, chal)

        dfn = await execute_turn(
            defender,
            Role.DEFENDER,
            settings.defender_model,
            settings.defender_instruction,
            window.trimmed(view_size),
            on_chunk=on_chunk,
        )
        window.append(dfn)
        logger.info("Defender responded: %s", dfn.content)
        if on_turn:
            on_turn(round_num, dfn)

        current_round = Round(number=round_num, challenger=chal.content, defender=dfn.content)
        rounds.append(current_round)

        if on_round_complete:
            on_round_complete(current_round)

    return rounds
