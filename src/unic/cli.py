"""Command-line interface for unic."""

import json
import sys
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
)
from rich.table import Table

from . import __version__
from .collapser import RunCollapser
from .config import STDIN_PATH, UnicConfig
from .errors import UnicError
from .runner import run

app = typer.Typer(
    name="unic",
    help="Collapse adjacent duplicate lines in text streams and files",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

console = Console(stderr=True)  # All output to stderr to preserve stdout for data

STATS_FORMATS = {"table", "json"}


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"unic {__version__}")
        raise typer.Exit()


def validate_arguments(stats: bool, stats_format: str) -> None:
    """Validate argument combinations and constraints.

    Raises:
        typer.BadParameter: If validation fails with clear message
    """
    if stats_format not in STATS_FORMATS:
        raise typer.BadParameter(
            f"--stats-format must be one of {sorted(STATS_FORMATS)}, got '{stats_format}'"
        )

    if stats_format != "table" and not stats:
        raise typer.BadParameter(
            "--stats-format requires --stats. Use --stats to print statistics."
        )


def print_error(error: UnicError) -> None:
    """Print a failure as a single unwrapped line on stderr."""
    console.print(escape(str(error)), style="red", highlight=False, soft_wrap=True)


@app.command()
def main(
    input_file: str = typer.Argument(
        STDIN_PATH,
        metavar="INPUT",
        help="Input file (reads from stdin if '-' or not specified)",
        show_default=False,
    ),
    output_file: Optional[str] = typer.Argument(
        None,
        metavar="OUTPUT",
        help="Output file (writes to stdout if not specified)",
        show_default=False,
    ),
    show_count: bool = typer.Option(
        False,
        "--count",
        "-c",
        help="Prefix lines by the number of occurrences",
    ),
    # StdErr Control
    stats: bool = typer.Option(
        False,
        "--stats",
        help="Print statistics to stderr after processing",
        rich_help_panel="StdErr Control",
    ),
    stats_format: str = typer.Option(
        "table",
        "--stats-format",
        help="Statistics output format: 'table' (default, Rich table) or 'json' (machine-readable)",
        rich_help_panel="StdErr Control",
    ),
    progress: bool = typer.Option(
        False,
        "--progress",
        "-p",
        help="Show progress indicator (auto-disabled when stdout is a pipe)",
        rich_help_panel="StdErr Control",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Collapse adjacent identical lines into one.

    Lines are compared without their trailing newline; any other trailing
    characters, including a carriage return, take part in the comparison.

    Examples:

        \b
        # Collapse a file
        unic session.log > collapsed.log

        \b
        # Use in a pipeline, with occurrence counts
        sort words.txt | unic -c

        \b
        # Write to a file and report statistics
        unic --stats session.log collapsed.log
    """
    validate_arguments(stats, stats_format)

    config = UnicConfig(in_file=input_file, out_file=output_file, show_count=show_count)

    # Progress shares the terminal with stdout unless output goes to a file
    show_progress = progress and (output_file is not None or sys.stdout.isatty())
    collapser = RunCollapser(show_count=show_count)

    try:
        if show_progress:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                TextColumn("{task.completed:,.0f} lines"),
                TextColumn("• Emitted: {task.fields[emitted]:,}"),
                console=console,
                transient=True,
            ) as progress_bar:
                task = progress_bar.add_task("Processing lines...", total=None, emitted=0)

                def update_progress(line_num: int, runs_emitted: int) -> None:
                    progress_bar.update(task, completed=line_num, emitted=runs_emitted)

                run(config, progress_callback=update_progress, collapser=collapser)
        else:
            run(config, collapser=collapser)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        if stats:
            if stats_format == "json":
                print_stats_json(collapser, config)
            else:
                console.print("[dim]Partial statistics:[/dim]")
                print_stats(collapser, config)
        raise typer.Exit(1) from None
    except UnicError as e:
        print_error(e)
        raise typer.Exit(1) from e

    if stats:
        if stats_format == "json":
            print_stats_json(collapser, config)
        else:
            print_stats(collapser, config)


def print_stats(collapser: RunCollapser, config: Optional[UnicConfig] = None) -> None:
    """Print collapsing statistics using rich."""
    stats = collapser.get_stats()

    if stats["total"] == 0:
        console.print("[yellow]No lines processed[/yellow]")
        return

    table = Table(title="Collapse Statistics", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")

    table.add_row("Total lines processed", f"{stats['total']:,}")
    table.add_row("Lines emitted", f"{stats['emitted']:,}")
    table.add_row("Lines collapsed", f"{stats['collapsed']:,}")
    table.add_row("Redundancy", f"{stats['redundancy_pct']:.1f}%")
    table.add_row("Show count", "yes" if collapser.show_count else "no")
    if config is not None:
        table.add_row("Input", "stdin" if config.in_file == STDIN_PATH else config.in_file)
        table.add_row("Output", config.out_file or "stdout")

    console.print()
    console.print(table)
    console.print()


def print_stats_json(collapser: RunCollapser, config: Optional[UnicConfig] = None) -> None:
    """Print collapsing statistics as JSON to stderr."""
    stats = collapser.get_stats()

    output: dict[str, dict] = {
        "statistics": {
            "lines": {
                "total": stats["total"],
                "emitted": stats["emitted"],
                "collapsed": stats["collapsed"],
            },
            "redundancy_pct": round(stats["redundancy_pct"], 1),
        },
        "configuration": {
            "show_count": collapser.show_count,
        },
    }
    if config is not None:
        output["configuration"]["input"] = config.in_file
        output["configuration"]["output"] = config.out_file

    print(json.dumps(output, indent=2), file=sys.stderr)


if __name__ == "__main__":
    app()
