"""CLI entry point for Gmail Dedup."""

from __future__ import annotations

import logging

import click

from .auth import check_auth, get_gmail_service
from .constants import DEFAULT_LOG_LEVEL, PAGE_SIZE
from .display import (
    configure_logging,
    console,
    display_failure,
    display_folder_report,
    display_labels,
)
from .exceptions import DedupError
from .export import export_duplicates
from .gmail_client import GmailMessageSource, list_labels, resolve_label
from .models import FolderReport
from .scanner import process_folder

logger = logging.getLogger(__name__)


def _service():
    try:
        return get_gmail_service()
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e


def _scan_options(func):
    func = click.option(
        "--format",
        "fmt",
        type=click.Choice(["csv", "json"]),
        default="csv",
        help="Format for --export.",
    )(func)
    func = click.option(
        "--export",
        "export_path",
        default=None,
        type=click.Path(dir_okay=False, writable=True),
        help="Write the duplicate messages found to this file.",
    )(func)
    func = click.option(
        "--page-size",
        default=PAGE_SIZE,
        show_default=True,
        type=click.IntRange(1, 500),
        help="Messages requested per page.",
    )(func)
    func = click.argument("folders", nargs=-1, required=True)(func)
    return func


def _run(
    ctx: click.Context,
    folders: tuple[str, ...],
    delete_mode: bool,
    page_size: int,
    export_path: str | None,
    fmt: str,
) -> None:
    """Deduplicate each folder on its own; one failure doesn't stop the rest."""
    service = _service()
    source = GmailMessageSource(service, page_size=page_size)
    try:
        known_labels = list_labels(service)
    except DedupError as e:
        raise click.ClickException(str(e)) from e
    reports: list[FolderReport] = []
    failed = 0

    for folder in folders:
        try:
            label = resolve_label(known_labels, folder)
            name = label.get("name", folder)
            with console.status(f"Scanning {name}..."):
                report = process_folder(source, label["id"], delete_mode, folder_name=name)
        except DedupError as e:
            logger.error("%s: %s", folder, e)
            display_failure(folder, e)
            failed += 1
            continue
        display_folder_report(report)
        reports.append(report)

    if export_path:
        written = export_duplicates(reports, format=fmt, output_path=export_path)
        console.print(f"[dim]Wrote {written} duplicate(s) to {export_path}[/dim]")

    if failed:
        ctx.exit(1)


@click.group()
@click.version_option(version="0.1.0", prog_name="gmail-dedup")
@click.option(
    "--log-level",
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Verbosity of the log output.",
)
def cli(log_level: str) -> None:
    """Gmail Dedup - find and trash duplicate emails in Gmail labels."""
    configure_logging(log_level)


@cli.command()
@_scan_options
@click.pass_context
def check(ctx: click.Context, folders, page_size: int, export_path: str | None, fmt: str) -> None:
    """Report duplicates in each FOLDER (label name or id) without deleting."""
    _run(ctx, folders, False, page_size, export_path, fmt)


@cli.command()
@_scan_options
@click.confirmation_option(prompt="Move duplicate emails to the trash?")
@click.pass_context
def delete(ctx: click.Context, folders, page_size: int, export_path: str | None, fmt: str) -> None:
    """Move duplicates in each FOLDER (label name or id) to the trash."""
    _run(ctx, folders, True, page_size, export_path, fmt)


@cli.command()
def labels() -> None:
    """List the labels that can be scanned."""
    service = _service()
    try:
        found = list_labels(service)
    except DedupError as e:
        raise click.ClickException(str(e)) from e
    display_labels(found)


@cli.command()
def auth() -> None:
    """Test or set up Gmail authentication."""
    address = check_auth()
    if address is None:
        raise click.ClickException("Authentication failed, see log for details.")
    console.print(f"[green]Authenticated as {address}[/green]")
