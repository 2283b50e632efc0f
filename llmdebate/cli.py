"""Click CLI — orchestrates config loading, provider selection, debate, and output."""

import asyncio
import dataclasses
import logging
import sys
import time
from pathlib import Path

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from config.config_loader import AppConfig, load_config
from llmdebate.claim import load_claim, load_instruction
from llmdebate.debate import run_debate
from llmdebate.errors import ConfigurationError, DebateError
from llmdebate.estimate import estimate_rounds, parse_duration
from llmdebate.healthcheck import run_health_checks
from llmdebate.models import DebateResult, DebateSettings, Role, Round, Turn
from llmdebate.output import print_round_summary, print_summary, write_report
from llmdebate.providers.anthropic import AnthropicProvider
from llmdebate.providers.base import AIProvider
from llmdebate.providers.gemini import GeminiProvider
from llmdebate.providers.ollama import OllamaProvider
from llmdebate.providers.openai_provider import OpenAIProvider
from llmdebate.providers.xai import XAIProvider
from llmdebate.synthesis import summarize

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)
err_console = Console(stderr=True, legacy_windows=False)

PROVIDER_CLASSES: dict[str, type[AIProvider]] = {
    "ollama": OllamaProvider,
    "openai": OpenAIProvider,
    "claude": AnthropicProvider,
    "gemini": GeminiProvider,
    "grok": XAIProvider,
}


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
    )


def _build_provider(config: AppConfig, name: str) -> AIProvider:
    """Instantiate the named provider or raise ConfigurationError."""
    if name not in PROVIDER_CLASSES or name not in config.models:
        raise ConfigurationError(f"Unknown provider '{name}'. Choose from: {', '.join(sorted(config.models))}")
    if name not in config.available_providers:
        raise ConfigurationError(f"Provider '{name}' has no API key. Set {config.models[name].api_key_env} in .env")
    try:
        return PROVIDER_CLASSES[name](config.models[name])
    except Exception as exc:
        raise ConfigurationError(f"Failed to instantiate provider '{name}': {exc}") from exc


def _resolve_schedule(
    rounds_cli: int | None,
    duration_cli: str | None,
    meta: dict,
    default_rounds: int,
) -> tuple[int | None, str | None]:
    """Returns (round_count, budget).

    Precedence: CLI flag > frontmatter > config default. The two options are
    taken as a pair from whichever source sets either of them, so a CLI
    --duration is never combined with a frontmatter rounds value.
    """
    if rounds_cli is not None or duration_cli:
        return rounds_cli, duration_cli or None
    if "rounds" in meta or "duration" in meta:
        try:
            rounds = int(meta["rounds"]) if meta.get("rounds") is not None else None
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid rounds in frontmatter: {meta['rounds']!r}") from exc
        duration = str(meta["duration"]) if meta.get("duration") else None
        return rounds, duration
    return default_rounds, None


def _build_settings(
    config: AppConfig,
    meta: dict,
    rounds: int | None,
    duration: str | None,
    challenger_model: str | None,
    defender_model: str | None,
    challenger_prompt: str | None,
    defender_prompt: str | None,
    max_history: int | None,
) -> DebateSettings:
    round_count, budget = _resolve_schedule(rounds, duration, meta, config.defaults.rounds)
    settings = DebateSettings(
        challenger_instruction=load_instruction(challenger_prompt, config.prompts.challenger),
        defender_instruction=load_instruction(defender_prompt, config.prompts.defender),
        round_count=round_count,
        budget=budget,
        challenger_model=challenger_model or meta.get("challenger") or config.defaults.challenger_model,
        defender_model=defender_model or meta.get("defender") or config.defaults.defender_model,
        max_history=max_history if max_history is not None else config.defaults.max_history,
    )
    settings.validate()
    if settings.budget:
        parse_duration(settings.budget)
    return settings


def _progress_label(round_num: int, turn: Turn, round_count: int | None) -> str | None:
    """Spinner text for the call that follows turn, or None after the last one."""
    if turn.role is Role.CHALLENGER:
        return f"Round {round_num}: Defender responding..."
    if round_count and round_num >= round_count:
        return None
    return f"Round {round_num + 1}: Challenger responding..."


async def _check_provider(provider: AIProvider, models: list[str | None]) -> None:
    """Ping every model in use; raise ConfigurationError if any fails."""
    console.print("\n[bold]Checking provider...[/bold]")
    results = await run_health_checks([(provider, m) for m in models])

    failed: list[str] = []
    for label in sorted(results):
        ok, err = results[label]
        if ok:
            console.print(f"  [green]OK  [/green] {label}")
        else:
            short_err = err.splitlines()[0][:120] if err else "unknown error"
            console.print(f"  [red]FAIL[/red] {label}: {escape(short_err)}")
            failed.append(label)
    console.print()

    if failed:
        raise ConfigurationError(f"Health check failed for: {', '.join(failed)}")


async def _run_debate_flow(
    claim: str,
    source: str,
    provider: AIProvider,
    settings: DebateSettings,
    summarizer_model: str | None,
    summary_instruction: str,
) -> DebateResult:
    """Estimate (if budgeted), debate, and summarize. Returns the result."""
    debate_start = time.monotonic()
    estimated = False

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TextColumn("[dim]{task.completed} chunks[/dim]"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Starting debate...", total=None)

        def on_chunk(_text: str) -> None:
            progress.advance(task)

        def on_turn(round_num: int, turn: Turn) -> None:
            label = _progress_label(round_num, turn, settings.round_count)
            if label is not None:
                progress.update(task, description=label)

        def on_round_complete(rnd: Round) -> None:
            progress.print(f"[green]OK[/green] Round {rnd.number} complete")

        if settings.budget:
            progress.update(task, description=f"Timing one trial round for budget {settings.budget}...")
            round_count = await estimate_rounds(
                claim, provider, provider, settings, settings.budget, on_chunk=on_chunk
            )
            progress.print(f"Estimated {round_count} rounds for {settings.budget}")
            settings = dataclasses.replace(settings, round_count=round_count, budget=None)
            estimated = True

        progress.update(task, description="Round 1: Challenger responding...", completed=0)
        rounds = await run_debate(
            claim,
            challenger=provider,
            defender=provider,
            settings=settings,
            on_turn=on_turn,
            on_round_complete=on_round_complete,
            on_chunk=on_chunk,
        )

        progress.update(task, description="Running synthesis...")
        summary = await summarize(rounds, provider, summarizer_model, summary_instruction, on_chunk=on_chunk)

    return DebateResult(
        claim=claim,
        rounds=rounds,
        summary=summary,
        summarizer_model=summarizer_model or provider.model_string(),
        total_duration_sec=time.monotonic() - debate_start,
        source=source,
        estimated_rounds=estimated,
    )


async def _run(
    claim: str,
    source: str,
    provider: AIProvider,
    settings: DebateSettings,
    summarizer_model: str | None,
    summary_instruction: str,
    output_path: Path,
    skip_health_check: bool,
) -> Path:
    if not skip_health_check:
        await _check_provider(provider, [settings.challenger_model, settings.defender_model, summarizer_model])

    if settings.unbounded:
        console.print("[yellow]No --rounds or --duration given: debating until interrupted (Ctrl+C).[/yellow]")

    console.print(f"\n[bold cyan]LLM Debate[/bold cyan] via {provider.name()}")
    console.print(
        f"Challenger: {settings.challenger_model or provider.model_string()} | "
        f"Defender: {settings.defender_model or provider.model_string()}"
    )
    console.print(f"Claim: [italic]{escape(claim[:80])}{'...' if len(claim) > 80 else ''}[/italic]\n")

    result = await _run_debate_flow(claim, source, provider, settings, summarizer_model, summary_instruction)

    for rnd in result.rounds:
        print_round_summary(rnd)
    print_summary(result)

    saved = write_report(result, output_path)
    console.print(f"\n[dim]Saved to: {saved}[/dim]")
    return saved


@click.command()
@click.option("--input", "input_path", required=True, type=click.Path(dir_okay=False, path_type=Path),
              help="Path to the seed claim (.md, optional YAML frontmatter)")
@click.option("--output", "output_path", required=True, type=click.Path(dir_okay=False, path_type=Path),
              help="Path to write the summary report")
@click.option("--rounds", default=None, type=click.IntRange(min=0),
              help="Number of debate rounds (0 = until interrupted)")
@click.option("--duration", default=None, help="Total wall-clock budget, e.g. 30m or 1h (excludes --rounds)")
@click.option("--provider", "provider_name", default=None, help="Backend to use (default: from config)")
@click.option("--challenger", "challenger_model", default=None, help="Challenger model")
@click.option("--defender", "defender_model", default=None, help="Defender model")
@click.option("--summarizer", "summarizer_model", default=None, help="Summary model (default: challenger model)")
@click.option("--challenger-prompt", default=None,
              help="Challenger instruction text, or a file path (has a / or an extension)")
@click.option("--defender-prompt", default=None,
              help="Defender instruction text, or a file path (has a / or an extension)")
@click.option("--max-history", default=None, type=click.IntRange(min=1),
              help="Non-seed turns visible to each call (default: from config)")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False, path_type=Path),
              help="Alternate settings.yaml")
@click.option("--skip-health-check", is_flag=True, default=False,
              help="Skip the connectivity check at startup")
@click.option("--verbose", is_flag=True, help="Enable DEBUG-level logging")
def main(
    input_path: Path,
    output_path: Path,
    rounds: int | None,
    duration: str | None,
    provider_name: str | None,
    challenger_model: str | None,
    defender_model: str | None,
    summarizer_model: str | None,
    challenger_prompt: str | None,
    defender_prompt: str | None,
    max_history: int | None,
    config_path: Path | None,
    skip_health_check: bool,
    verbose: bool,
) -> None:
    """LLM Debate -- run a context-preserving Challenger/Defender debate.

    \b
    Examples:
      llmdebate --input claim.md --output report.md --rounds 3
      llmdebate --input claim.md --output report.md --duration 30m
      llmdebate --input claim.md --output report.md --provider claude --rounds 2
      llmdebate --input claim.md --output report.md --challenger-prompt prompts/attack.txt
    """
    load_dotenv()
    _setup_logging(verbose)

    try:
        config = load_config(config_path) if config_path else load_config()
    except FileNotFoundError as exc:
        err_console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        sys.exit(1)

    try:
        if rounds and duration:
            raise ConfigurationError("--rounds and --duration cannot be used together")

        claim, meta = load_claim(input_path)
        settings = _build_settings(
            config,
            meta,
            rounds=rounds,
            duration=duration,
            challenger_model=challenger_model,
            defender_model=defender_model,
            challenger_prompt=challenger_prompt,
            defender_prompt=defender_prompt,
            max_history=max_history,
        )
        provider = _build_provider(config, provider_name or config.defaults.provider)
        effective_summarizer = summarizer_model or config.defaults.summarizer_model or settings.challenger_model

        asyncio.run(
            _run(
                claim=claim,
                source=str(input_path),
                provider=provider,
                settings=settings,
                summarizer_model=effective_summarizer,
                summary_instruction=config.prompts.summary,
                output_path=output_path,
                skip_health_check=skip_health_check,
            )
        )
    except DebateError as exc:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted.[/yellow] No report written.")
        sys.exit(130)


if __name__ == "__main__":
    main()
