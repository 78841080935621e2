from __future__ import annotations

from gmail_dedup.exceptions import StoreDeleteError, StoreReadError
from gmail_dedup.models import MessagePage, MessageRecord


def make_records(keys: list[str | None], sizes: list[int]) -> list[MessageRecord]:
    """Build records m0, m1, ... from parallel identity/size lists."""
    return [
        MessageRecord(
            identity_key=key or "",
            size=size,
            handle=f"m{i}",
            date=f"2024-01-{i + 1:02d}",
            subject=f"Subject {i}",
        )
        for i, (key, size) in enumerate(zip(keys, sizes))
    ]


class FakeMessageSource:
    """In-memory message store serving fixed pages and recording deletions."""

    def __init__(
        self,
        records: list[MessageRecord],
        pages: list[int] | None = None,
        fail_on_page: int | None = None,
        fail_delete: bool = False,
    ) -> None:
        self.records = list(records)
        self.pages = pages  # page lengths; one page holding everything when None
        self.fail_on_page = fail_on_page
        self.fail_delete = fail_delete
        self.list_calls: list[str] = []
        self.continue_calls: list[object] = []
        self.delete_calls: list[list[str]] = []

    def _split(self) -> list[list[MessageRecord]]:
        lengths = self.pages if self.pages is not None else [len(self.records)]
        out, start = [], 0
        for length in lengths:
            out.append(self.records[start:start + length])
            start += length
        return out

    def _page(self, number: int) -> MessagePage:
        if self.fail_on_page == number:
            raise StoreReadError(f"page {number} unavailable")
        pages = self._split()
        records = pages[number] if number < len(pages) else []
        continuation = number + 1 if number + 1 < len(pages) else None
        return MessagePage(records=records, continuation=continuation)

    def list_page(self, folder_id: str) -> MessagePage:
        self.list_calls.append(folder_id)
        return self._page(0)

    def continue_page(self, continuation: object) -> MessagePage:
        self.continue_calls.append(continuation)
        return self._page(continuation)

    def delete_messages(self, handles: list[str]) -> int:
        self.delete_calls.append(list(handles))
        if self.fail_delete:
            raise StoreDeleteError("store refused the deletion")
        removed = set(handles)
        self.records = [r for r in self.records if r.handle not in removed]
        # Page layout no longer matches after removal
        self.pages = None
        return len(removed)
