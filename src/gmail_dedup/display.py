"""Rich-based display functions for Gmail Dedup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .constants import FAILURE_TITLE, REPORT_TITLE
from .models import FolderReport

console = Console()


def configure_logging(level: str) -> None:
    """Send log records through rich on the shared console."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # Discovery and transport chatter is noise below WARNING
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)


def _folder_label(report: FolderReport) -> str:
    if report.folder_name and report.folder_name != report.outcome.folder_id:
        return f"{report.folder_name} ({report.outcome.folder_id})"
    return report.outcome.folder_id


def display_folder_report(report: FolderReport) -> None:
    """Show the summary for one folder."""
    outcome = report.outcome
    if report.deleted:
        color = "green"
    elif outcome.has_duplicates:
        color = "yellow"
    else:
        color = "white"

    lines = [
        f"[bold]Folder:[/bold] {_folder_label(report)}",
        "",
        f"[{color}]{report.summary}[/{color}]",
    ]
    console.print(Panel("\n".join(lines), title=REPORT_TITLE))


def display_failure(folder: str, error: Exception) -> None:
    """Show a failed folder in place of its summary."""
    console.print(
        Panel(
            f"[bold]Folder:[/bold] {folder}\n\n[red]{error}[/red]",
            title=FAILURE_TITLE,
            border_style="red",
        )
    )


def display_labels(labels: list[dict]) -> None:
    """Display the labels that can be passed as folders."""
    table = Table(title="Labels")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Type")

    for label in labels:
        table.add_row(label["id"], label.get("name", ""), label.get("type", ""))

    console.print(table)
