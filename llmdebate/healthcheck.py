"""Provider health checks — ping each backend/model pair before starting a debate."""

import asyncio
import logging

from llmdebate.providers.base import AIProvider

logger = logging.getLogger(__name__)

_PING_INSTRUCTION = "You are a connectivity check."
_PING_PROMPT = "Reply with the word OK only."
_TIMEOUT_SEC = 15.0


async def _check_one(provider: AIProvider, model: str | None) -> tuple[str, bool, str]:
    """Ping a single provider/model. Returns (label, ok, error_message)."""
    label = f"{provider.name()}:{model or provider.model_string()}"
    try:
        await asyncio.wait_for(
            provider.generate(_PING_INSTRUCTION, _PING_PROMPT, model=model),
            timeout=_TIMEOUT_SEC,
        )
        return label, True, ""
    except Exception as exc:
        logger.debug("Health check failed for %s: %s", label, exc)
        return label, False, str(exc) or type(exc).__name__


async def run_health_checks(
    targets: list[tuple[AIProvider, str | None]],
) -> dict[str, tuple[bool, str]]:
    """Ping all distinct (provider, model) pairs in parallel.

    Returns:
        Dict mapping "provider:model" -> (ok, error_message).
        error_message is "" when ok is True.
    """
    unique: dict[tuple[int, str | None], tuple[AIProvider, str | None]] = {}
    for provider, model in targets:
        unique.setdefault((id(provider), model or provider.model_string()), (provider, model))

    results = await asyncio.gather(*(_check_one(p, m) for p, m in unique.values()))
    return {label: (ok, err) for label, ok, err in results}
