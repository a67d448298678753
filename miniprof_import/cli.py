"""
CLI interface for miniprof-import.

Converts a miniprofiler JSON export into a compressed trace file.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from miniprof_import.errors import ImportFailure
from miniprof_import.output import FileCompression
from miniprof_import.pipeline import ImportSummary, run_import
from miniprof_import.utils.config import get_config

app = typer.Typer(
    name="miniprof-import",
    help="Convert miniprofiler timing exports into trace files",
    add_completion=False,
)
console = Console()


@app.command()
def convert(
    input_file: Path = typer.Argument(
        ...,
        help="Path to the miniprofiler JSON export",
    ),
    output_file: Path = typer.Argument(
        ...,
        help="Path of the trace file to create",
    ),
    compression: Optional[FileCompression] = typer.Option(
        None,
        "-c", "--compression",
        help="Payload compression effort (defaults to MINIPROF_COMPRESSION or fast)",
        case_sensitive=False,
    ),
    verbose: bool = typer.Option(
        False,
        "-v", "--verbose",
        help="Print an import summary when done",
    ),
    quiet: bool = typer.Option(
        False,
        "-q", "--quiet",
        help="Hide the progress spinner",
    ),
):
    """
    Import a miniprofiler export.

    Example:
        miniprof-import timings.json timings.trace
        miniprof-import timings.json timings.trace -c extreme -v
    """
    try:
        config = get_config()
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    level = compression or config.compression

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
        disable=quiet or not config.show_progress,
    ) as progress:
        task = progress.add_task("Starting...", total=None)

        try:
            summary = run_import(
                input_file,
                output_file,
                compression=level,
                on_stage=lambda description: progress.update(task, description=description),
            )
        except ImportFailure as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

    if verbose:
        _print_import_summary(summary)

    console.print(f"[green]Trace saved to:[/green] {escape(str(summary.output_path))}")


def _print_import_summary(summary: ImportSummary):
    """Print import summary table."""
    table = Table(title="Import Summary", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Input", str(summary.input_path))
    table.add_row("Output", str(summary.output_path))
    table.add_row("Timing Records", str(summary.record_count))
    table.add_row("Events", str(summary.event_count))
    table.add_row("Threads", str(summary.thread_count))
    table.add_row("Named Threads", str(summary.named_thread_count))
    table.add_row("Zones", str(summary.zone_count))
    table.add_row("Time Origin", str(summary.mts))
    table.add_row("Span", str(summary.span))
    table.add_row("Compression", summary.compression.value)

    console.print(table)


if __name__ == "__main__":
    app()
