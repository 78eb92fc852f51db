"""edusync show: display the discourse units of a result file."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from edusync.models.result import PipelineResult
from edusync.utils.io import read_json

console = Console()

TAG_STYLES = {
    "BG": "dim",
    "CL": "bold",
    "EV": "cyan",
    "EX": "blue",
    "CS": "yellow",
    "RB": "magenta",
    "IM": "green",
}


def format_ms(ms: float) -> str:
    seconds = int(ms) // 1000
    return f"{seconds // 60:02d}:{seconds % 60:02d}.{int(ms) % 1000:03d}"


@click.command()
@click.argument("result_file", type=click.Path(exists=True, dir_okay=False))
def show_cmd(result_file: str) -> None:
    """Show the time-coded discourse units of a pipeline result."""
    result = PipelineResult(**read_json(Path(result_file)))
    meta = result.metadata

    console.print(
        f"\n[bold]{len(result.timed_units)}[/bold] discourse unit(s), "
        f"{meta.paragraph_count} paragraph(s), {meta.word_count} word(s)"
    )

    table = Table(title="Discourse Units", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Tag")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Content")

    for unit in result.timed_units:
        tag = unit.tag.value
        table.add_row(
            str(unit.global_index),
            f"[{TAG_STYLES.get(tag, '')}]{tag}[/]",
            format_ms(unit.start_ms),
            format_ms(unit.end_ms),
            unit.content,
        )

    console.print(table)
    console.print()
