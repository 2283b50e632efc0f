"""Rich console output and summary file save for debate results."""

import logging
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.rule import Rule
from rich.text import Text

from llmdebate.models import DebateResult, Round

logger = logging.getLogger(__name__)

console = Console(legacy_windows=False)


def _preview(text: str, words: int = 50) -> str:
    """Return first N words of a turn."""
    all_words = text.split()
    preview = " ".join(all_words[:words])
    if len(all_words) > words:
        preview += "..."
    return preview


def print_round_summary(rnd: Round) -> None:
    """Print a brief preview of both turns of a round to the console."""
    console.print(Rule(f"[bold cyan]Round {rnd.number}[/bold cyan]"))
    console.print(Panel(Text(_preview(rnd.challenger)), title="[bold red]Challenger[/bold red]", border_style="dim"))
    console.print(Panel(Text(_preview(rnd.defender)), title="[bold green]Defender[/bold green]", border_style="dim"))


def print_summary(result: DebateResult) -> None:
    """Print the final summary to the console using Rich markdown."""
    console.print(Rule("[bold green]Debate Summary[/bold green]"))
    rounds_label = f"{len(result.rounds)}" + (" (estimated)" if result.estimated_rounds else "")
    console.print(
        Text(
            f"Summarized by: {result.summarizer_model} | "
            f"Duration: {result.total_duration_sec:.1f}s | "
            f"Rounds: {rounds_label} | "
            f"Source: {result.source}",
            style="dim",
        )
    )
    console.print(Markdown(result.summary))


def write_report(result: DebateResult, output_path: Path) -> Path:
    """Write the summary text to output_path, creating parent directories.

    Only the summary is persisted; the round transcript is console output.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.summary, encoding="utf-8")
    logger.info("Summary saved to: %s", output_path)
    return output_path
