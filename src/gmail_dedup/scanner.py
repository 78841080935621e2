"""Scan orchestration - pages through a folder, classifies each message."""

from __future__ import annotations

import logging

from .models import FolderReport, MessageRecord, MessageSource, ScanOutcome
from .report import apply_outcome

logger = logging.getLogger(__name__)


def _classify(
    record: MessageRecord,
    index: dict[str, int],
    duplicates: list[str],
) -> str:
    """Classify one record against the identity index.

    Returns "first", "duplicate" or "skipped".  Only first occurrences
    write to ``index``; an existing entry is never overwritten.
    """
    key = record.identity_key
    if not key:
        logger.warning(
            "Skipping message with no identity key. Date: %r, Subject: %r",
            record.date,
            record.subject,
        )
        return "skipped"

    if key not in index:
        index[key] = record.size
        return "first"

    if index[key] == record.size:
        duplicates.append(record.handle)
        return "duplicate"

    # Same identity, different size: could be a header collision or a
    # truncated copy, so it is never deleted.
    logger.warning(
        "Skipping message with different size than its duplicate. "
        "Identity: %r, Subject: %r (%d bytes, first seen %d bytes)",
        key,
        record.subject,
        record.size,
        index[key],
    )
    return "skipped"


def scan_folder(source: MessageSource, folder_id: str) -> ScanOutcome:
    """Scan every page of ``folder_id`` once, in listing order.

    The first record seen for an identity key is kept; later records with the
    same key and the same size are duplicates.  Page fetch errors propagate
    unchanged and no outcome is returned.
    """
    index: dict[str, int] = {}
    duplicates: list[str] = []
    first = skipped = 0
    total = 0

    page = source.list_page(folder_id)
    page_num = 1
    while page.records:
        logger.debug("Page %d of %s: %d messages", page_num, folder_id, len(page.records))
        for record in page.records:
            total += 1
            kind = _classify(record, index, duplicates)
            if kind == "first":
                first += 1
            elif kind == "skipped":
                skipped += 1

        if page.continuation is None:
            break
        page = source.continue_page(page.continuation)
        page_num += 1

    return ScanOutcome(
        folder_id=folder_id,
        total_count=total,
        duplicate_handles=tuple(duplicates),
        skipped_count=skipped,
        first_occurrence_count=first,
    )


def process_folder(
    source: MessageSource,
    folder_id: str,
    delete_mode: bool,
    folder_name: str = "",
) -> FolderReport:
    """Scan a folder, trash its duplicates if ``delete_mode``, and summarize."""
    logger.info("Scanning %s for duplicates", folder_name or folder_id)
    outcome = scan_folder(source, folder_id)
    report = apply_outcome(
        outcome,
        source.delete_messages,
        delete_mode=delete_mode,
        folder_name=folder_name,
    )
    logger.info("%s: %s", folder_name or folder_id, report.summary)
    return report
