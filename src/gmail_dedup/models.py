"""Data models for Gmail Dedup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class MessageRecord:
    """One message as seen by a scan."""

    identity_key: str  # Message-ID header, or a deterministic fallback
    size: int
    handle: str  # Gmail message id, used for deletion
    date: str = ""
    subject: str = ""


@dataclass
class MessagePage:
    """A batch of records plus the cursor for the next batch (None when exhausted)."""

    records: list[MessageRecord] = field(default_factory=list)
    continuation: object | None = None


@dataclass(frozen=True)
class ScanOutcome:
    """Result of scanning one folder.

    ``total_count`` always equals
    ``first_occurrence_count + len(duplicate_handles) + skipped_count``.
    """

    folder_id: str
    total_count: int = 0
    duplicate_handles: tuple[str, ...] = ()
    skipped_count: int = 0
    first_occurrence_count: int = 0

    @property
    def duplicate_count(self) -> int:
        return len(self.duplicate_handles)

    @property
    def has_duplicates(self) -> bool:
        return bool(self.duplicate_handles)


@dataclass
class FolderReport:
    """What the reporting sink receives for one folder."""

    outcome: ScanOutcome
    summary: str
    deleted: bool = False
    folder_name: str = ""


class MessageSource(Protocol):
    """Paginated supplier of message records that can also delete them."""

    def list_page(self, folder_id: str) -> MessagePage:
        """Return the first page of records in ``folder_id``."""
        ...

    def continue_page(self, continuation: object) -> MessagePage:
        """Return the page following the one that produced ``continuation``."""
        ...

    def delete_messages(self, handles: list[str]) -> int:
        """Delete ``handles`` in one request; return how many were deleted."""
        ...
