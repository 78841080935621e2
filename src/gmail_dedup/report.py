"""Decide what to do with a finished scan and describe it."""

from __future__ import annotations

import logging
from typing import Callable

from .models import FolderReport, ScanOutcome

logger = logging.getLogger(__name__)


def compose_summary(outcome: ScanOutcome, deleted: bool) -> str:
    """Build the one-line summary shown to the operator."""
    total = outcome.total_count
    if outcome.has_duplicates:
        if deleted:
            text = f"Deleted {outcome.duplicate_count} duplicate emails from {total} total emails"
        else:
            text = f"Found {outcome.duplicate_count} duplicate emails among {total} total emails"
    else:
        text = f"No duplicates found after iterating {total} emails"

    if outcome.skipped_count > 0:
        text += f" (and {outcome.skipped_count} skipped emails, see log for details)."
    else:
        text += "."
    return text


def apply_outcome(
    outcome: ScanOutcome,
    deleter: Callable[[list[str]], object],
    delete_mode: bool,
    folder_name: str = "",
) -> FolderReport:
    """Delete the duplicates of a completed scan when asked to, then summarize.

    ``deleter`` is called at most once, with every duplicate handle, and only
    when ``delete_mode`` is set and duplicates exist.  Errors raised by it
    propagate and no report is produced.
    """
    deleted = False
    if outcome.has_duplicates and delete_mode:
        logger.info(
            "Deleting %d duplicate messages from %s",
            outcome.duplicate_count,
            folder_name or outcome.folder_id,
        )
        deleter(list(outcome.duplicate_handles))
        deleted = True

    return FolderReport(
        outcome=outcome,
        summary=compose_summary(outcome, deleted),
        deleted=deleted,
        folder_name=folder_name,
    )
