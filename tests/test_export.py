"""Tests for exporting duplicates."""

import csv

import pytest

from gmail_dedup.export import export_duplicates
from gmail_dedup.models import FolderReport, ScanOutcome


@pytest.fixture
def reports():
    return [
        FolderReport(
            outcome=ScanOutcome("INBOX", 5, ("m2", "m4"), 0, 3),
            summary="Deleted 2 duplicate emails from 5 total emails.",
            deleted=True,
            folder_name="Inbox",
        ),
        FolderReport(
            outcome=ScanOutcome("Label_1", 2, (), 0, 2),
            summary="No duplicates found after iterating 2 emails.",
        ),
    ]


def test_export_csv(reports, tmp_path):
    out = tmp_path / "dups.csv"
    written = export_duplicates(reports, format="csv", output_path=str(out))
    assert written == 2
    with open(out, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["handle"] for r in rows] == ["m2", "m4"]
    assert rows[0]["folder_name"] == "Inbox"
    assert rows[0]["deleted"] == "True"


def test_export_unknown_format(reports, tmp_path):
    with pytest.raises(ValueError):
        export_duplicates(reports, format="xml", output_path=str(tmp_path / "x"))
