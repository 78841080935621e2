"""Export the duplicate messages found by a run to CSV or JSON."""

import csv
import json

from .models import FolderReport

FIELDNAMES = ["folder_id", "folder_name", "handle", "deleted"]


def _rows(reports: list[FolderReport]) -> list[dict]:
    rows = []
    for report in reports:
        for handle in report.outcome.duplicate_handles:
            rows.append(
                {
                    "folder_id": report.outcome.folder_id,
                    "folder_name": report.folder_name,
                    "handle": handle,
                    "deleted": report.deleted,
                }
            )
    return rows


def export_duplicates(reports: list[FolderReport], format: str, output_path: str) -> int:
    """Write one row per duplicate message to a file.

    Args:
        reports: Folder reports from this run.
        format: Output format, either 'csv' or 'json'.
        output_path: Path to write the output file.

    Returns:
        The number of rows written.
    """
    rows = _rows(reports)

    if format == "csv":
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()
            writer.writerows(rows)
    elif format == "json":
        with open(output_path, "w") as f:
            json.dump(rows, f, indent=2)
    else:
        raise ValueError(f"Unsupported export format: {format}")

    return len(rows)
