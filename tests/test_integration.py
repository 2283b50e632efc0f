"""Integration tests — real backend calls, no mocks.

Runs against a local Ollama server when LLMDEBATE_OLLAMA=1 is set in the
environment or .env.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

load_dotenv()

pytestmark = pytest.mark.integration

if os.environ.get("LLMDEBATE_OLLAMA", "").strip() != "1":
    pytestmark = pytest.mark.skip(reason="Set LLMDEBATE_OLLAMA=1 to run against a local Ollama server")


async def test_full_debate_pipeline(tmp_path: Path):
    """Run a real 1-round debate plus summary, verify no crash."""
    from config.config_loader import load_config
    from llmdebate.cli import _build_provider
    from llmdebate.debate import run_debate
    from llmdebate.models import DebateResult, DebateSettings
    from llmdebate.output import write_report
    from llmdebate.synthesis import summarize

    config = load_config()
    provider = _build_provider(config, "ollama")
    settings = DebateSettings(
        challenger_instruction=config.prompts.challenger,
        defender_instruction=config.prompts.defender,
        round_count=1,
        challenger_model=config.defaults.challenger_model,
        defender_model=config.defaults.defender_model,
        max_history=config.defaults.max_history,
    )
    chunks: list[str] = []

    rounds = await run_debate(
        "A small team should use a monorepo for its Python microservices.",
        challenger=provider,
        defender=provider,
        settings=settings,
        on_chunk=chunks.append,
    )

    assert len(rounds) == 1
    assert rounds[0].challenger.strip()
    assert rounds[0].defender.strip()
    assert chunks, "Streaming produced no chunks"

    summary = await summarize(rounds, provider, settings.challenger_model, config.prompts.summary)
    assert summary.strip()

    result = DebateResult(
        claim="monorepo",
        rounds=rounds,
        summary=summary,
        summarizer_model=settings.challenger_model or provider.model_string(),
        total_duration_sec=0.0,
    )
    saved = write_report(result, tmp_path / "report.md")
    assert saved.read_text(encoding="utf-8") == summary
