"""
Command line interface powered by Typer.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.text import Text

from .controller import SearchController
from .fetcher import QiitaFetcher
from .models import DEFAULT_TARGET
from .reporting import render_cli_report, write_html_report, write_text_report
from .state import Phase, ViewState

app = typer.Typer(add_completion=False)
console = Console()
err_console = Console(stderr=True)


class ReportFormat(str, Enum):
    CLI = "cli"
    TEXT = "text"
    WEB = "web"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _html_destination(output: Optional[Path], state: ViewState) -> Path:
    default_name = f"orgposts__{state.start}__{state.end}.html"
    if output is None:
        return Path(default_name)
    if output.exists() and output.is_dir():
        return output / default_name
    if output.suffix == "":
        return output.with_suffix(".html")
    return output


async def _search_with_progress(controller: SearchController) -> ViewState:
    progress = Progress(
        SpinnerColumn(style="green"),
        TextColumn("{task.description}", justify="left"),
        TimeElapsedColumn(),
        transient=True,
        console=err_console,
    )
    with progress:
        progress.add_task(f"Querying Qiita for org:{controller.target.organization}…", total=None)
        return await controller.submit()


@app.command()
def search(
    start: Optional[str] = typer.Option(
        None,
        "--start",
        "-s",
        help="First day of the range (YYYY-MM-DD). Defaults to one month ago.",
        show_default=False,
    ),
    end: Optional[str] = typer.Option(
        None,
        "--end",
        "-e",
        help="Last day of the range (YYYY-MM-DD). Defaults to today.",
        show_default=False,
    ),
    report_format: ReportFormat = typer.Option(
        ReportFormat.CLI,
        "--format",
        "-f",
        case_sensitive=False,
        help="Console report, the raw text block, or an HTML page.",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the text block (--format text) or the HTML page (--format web) here.",
        show_default=False,
    ),
    timeout: float = typer.Option(
        10.0,
        "--timeout",
        min=0.1,
        help="Seconds to wait for the Qiita API.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log requests and state changes to stderr.",
    ),
) -> None:
    """
    List the organization's posts within a date range, grouped by author.
    """

    _configure_logging(verbose)

    controller = SearchController(QiitaFetcher(timeout=timeout), target=DEFAULT_TARGET)
    defaults = controller.state
    controller.set_range(
        defaults.start if start is None else start,
        defaults.end if end is None else end,
    )

    if report_format is ReportFormat.TEXT:
        state = asyncio.run(controller.submit())
    else:
        state = asyncio.run(_search_with_progress(controller))

    if report_format is ReportFormat.CLI:
        render_cli_report(console, state, controller.target)
    elif report_format is ReportFormat.WEB:
        destination = write_html_report(state, controller.target, _html_destination(output, state))
        console.print(f"[green]Report saved to[/green] {destination}")
    elif state.phase is Phase.SUCCESS:
        if output is None:
            typer.echo(state.output_text)
        else:
            destination = write_text_report(state.output_text, output)
            err_console.print(f"[green]Text saved to[/green] {destination}")

    if state.phase is Phase.FAILED:
        if report_format is not ReportFormat.CLI:
            err_console.print(Text(state.error or "", style="red"))
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
