"""Wall-clock budget parsing and single-sample round estimation."""

import dataclasses
import logging
import math
import re
import time
from collections.abc import Callable

from llmdebate.debate import run_debate
from llmdebate.errors import EstimationFailure
from llmdebate.models import DebateSettings
from llmdebate.providers.base import AIProvider, ChunkCallback

logger = logging.getLogger(__name__)

_MIN_ROUND_SEC = 0.001

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")


def parse_duration(text: str) -> float:
    """Parse a duration such as "90s", "2m", "1h30m" or "1.5h" into seconds.

    Raises:
        EstimationFailure: If the text is empty, malformed, or not positive.
    """
    value = (text or "").strip()
    if not value:
        raise EstimationFailure("invalid duration: empty value")

    total = 0.0
    pos = 0
    for match in _COMPONENT.finditer(value):
        if match.start() != pos:
            break
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        pos = match.end()

    if pos != len(value):
        raise EstimationFailure(f"invalid duration: {text!r}")
    if total <= 0:
        raise EstimationFailure(f"invalid duration: {text!r} must be positive")
    return total


async def estimate_rounds(
    claim: str,
    challenger: AIProvider,
    defender: AIProvider,
    settings: DebateSettings,
    budget: str,
    clock: Callable[[], float] = time.monotonic,
    on_chunk: ChunkCallback | None = None,
) -> int:
    """Project how many rounds fit into budget from one timed trial round.

    The trial round is discarded. Later rounds carry more context and are
    usually slower, so the figure is a best-effort upper estimate.

    Raises:
        EstimationFailure: If budget cannot be parsed (before any call is made).
        GenerationFailure: If the trial round fails.
    """
    budget_sec = parse_duration(budget)
    trial = dataclasses.replace(settings, round_count=1, budget=None)

    start = clock()
    await run_debate(claim, challenger, defender, trial, on_chunk=on_chunk)
    elapsed = max(clock() - start, _MIN_ROUND_SEC)

    rounds = max(1, math.floor(budget_sec / elapsed))
    logger.info("Estimated %d rounds (1 round = %.1fs, budget %s)", rounds, elapsed, budget)
    return rounds
