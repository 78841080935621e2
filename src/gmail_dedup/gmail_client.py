"""Gmail API client functions for listing labels and paging through messages."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass

from googleapiclient.errors import HttpError
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from gmail_dedup.constants import (
    BATCH_SIZE,
    FALLBACK_IDENTITY_DOMAIN,
    FALLBACK_IDENTITY_HEADERS,
    METADATA_HEADERS,
    PAGE_SIZE,
    TRASH_BATCH_SIZE,
)
from gmail_dedup.exceptions import StoreDeleteError, StoreReadError, UnknownFolderError
from gmail_dedup.models import MessagePage, MessageRecord

logger = logging.getLogger(__name__)


def _is_retryable_http_error(exc: BaseException) -> bool:
    return isinstance(exc, HttpError) and exc.resp.status in (429, 500, 503)


_retry_transient = retry(
    retry=retry_if_exception(_is_retryable_http_error),
    wait=wait_exponential(multiplier=1, min=1, max=60),
    stop=stop_after_attempt(5),
    reraise=True,
)


@dataclass(frozen=True)
class PageCursor:
    """Continuation for a label listing: Gmail page tokens are per query."""

    label_id: str
    page_token: str


def identity_from_headers(headers: dict[str, str], message_id: str) -> str:
    """Return the identity key for a message.

    Uses the Message-ID header when present.  Otherwise hashes the
    FALLBACK_IDENTITY_HEADERS so copies of the same header-less message still
    collide; with none of those either, the Gmail id is used, which is unique.
    """
    header_id = headers.get("Message-ID", "").strip()
    if header_id:
        return header_id

    values = [headers.get(name, "").strip() for name in FALLBACK_IDENTITY_HEADERS]
    if not any(values):
        return message_id
    digest = hashlib.md5("\n".join(values).encode("utf-8")).hexdigest()
    return f"<{digest}@{FALLBACK_IDENTITY_DOMAIN}>"


def _record_from_response(message_id: str, response: dict) -> MessageRecord:
    headers = {}
    for h in response.get("payload", {}).get("headers", []):
        # Header names are case-insensitive; Gmail returns them as sent
        name = next((n for n in METADATA_HEADERS if n.lower() == h["name"].lower()), h["name"])
        headers.setdefault(name, h["value"])

    return MessageRecord(
        identity_key=identity_from_headers(headers, message_id),
        size=int(response.get("sizeEstimate", 0)),
        handle=message_id,
        date=headers.get("Date", ""),
        subject=headers.get("Subject", ""),
    )


def list_labels(service) -> list[dict]:
    """Return all labels of the mailbox, sorted by name."""
    try:
        resp = _execute(service.users().labels().list(userId="me"))
    except HttpError as e:
        raise StoreReadError(f"Could not list labels: {e}") from e
    return sorted(resp.get("labels", []), key=lambda label: label.get("name", "").lower())


def resolve_label(labels: list[dict], name_or_id: str) -> dict:
    """Find a label from ``list_labels`` by exact id first, then by case-insensitive name."""
    for label in labels:
        if label["id"] == name_or_id:
            return label
    for label in labels:
        if label.get("name", "").lower() == name_or_id.lower():
            return label
    raise UnknownFolderError(f"No label matches {name_or_id!r}. Run 'labels' to see them.")


@_retry_transient
def _execute(request) -> dict:
    return request.execute()


@_retry_transient
def _execute_batch_modify(service, msg_ids: list[str]) -> None:
    service.users().messages().batchModify(
        userId="me",
        body={
            "ids": msg_ids,
            "addLabelIds": ["TRASH"],
        },
    ).execute()


class GmailMessageSource:
    """Pages through the messages carrying a label, in Gmail's listing order."""

    def __init__(self, service, page_size: int = PAGE_SIZE) -> None:
        self.service = service
        self.page_size = page_size

    def list_page(self, folder_id: str) -> MessagePage:
        return self._fetch_page(folder_id, None)

    def continue_page(self, continuation: object) -> MessagePage:
        if not isinstance(continuation, PageCursor):
            raise TypeError(f"Unexpected continuation {continuation!r}")
        return self._fetch_page(continuation.label_id, continuation.page_token)

    def _fetch_page(self, label_id: str, page_token: str | None) -> MessagePage:
        kwargs: dict = {
            "userId": "me",
            "labelIds": [label_id],
            "maxResults": self.page_size,
            "fields": "messages/id,nextPageToken",
        }
        if page_token:
            kwargs["pageToken"] = page_token

        try:
            resp = _execute(self.service.users().messages().list(**kwargs))
        except HttpError as e:
            raise StoreReadError(f"Could not list messages in {label_id}: {e}") from e

        ids = [m["id"] for m in resp.get("messages", [])]
        records = self.fetch_records(ids)

        next_token = resp.get("nextPageToken")
        continuation = PageCursor(label_id, next_token) if next_token else None
        return MessagePage(records=records, continuation=continuation)

    def fetch_records(self, message_ids: list[str]) -> list[MessageRecord]:
        """Fetch metadata for messages in batches, preserving the order of ``message_ids``."""
        by_id: dict[str, MessageRecord] = {}

        for start in range(0, len(message_ids), BATCH_SIZE):
            chunk = message_ids[start:start + BATCH_SIZE]
            try:
                self._fetch_chunk(chunk, by_id)
            except HttpError as e:
                raise StoreReadError(f"Metadata batch failed: {e}") from e

        return [by_id[msg_id] for msg_id in message_ids]

    @_retry_transient
    def _fetch_chunk(self, chunk: list[str], by_id: dict[str, MessageRecord]) -> None:
        """Fetch the ids of ``chunk`` not yet in ``by_id`` with one batch request.

        Gmail reports throttled messages through the callback, not from
        ``execute()``; the first such error is raised so the retry fetches
        only what is still missing.
        """
        pending = [msg_id for msg_id in chunk if msg_id not in by_id]
        failures: list[tuple[str, Exception]] = []
        batch = self.service.new_batch_http_request()

        def _make_callback(msg_id: str):
            def _cb(request_id, response, exception):
                if exception is not None:
                    failures.append((msg_id, exception))
                    return
                by_id[msg_id] = _record_from_response(msg_id, response)

            return _cb

        for msg_id in pending:
            batch.add(
                self.service.users().messages().get(
                    userId="me",
                    id=msg_id,
                    format="metadata",
                    metadataHeaders=METADATA_HEADERS,
                    fields="id,sizeEstimate,payload/headers",
                ),
                callback=_make_callback(msg_id),
            )

        batch.execute()

        if not failures:
            return
        permanent = [(m, exc) for m, exc in failures if not _is_retryable_http_error(exc)]
        if permanent:
            msg_id, exc = permanent[0]
            raise StoreReadError(
                f"Could not fetch {len(permanent)} message(s), first {msg_id}: {exc}"
            )
        logger.debug("Retrying %d throttled message(s)", len(failures))
        raise failures[0][1]

    def delete_messages(self, handles: list[str]) -> int:
        """Move messages to trash in batches using batchModify."""
        trashed = 0
        for start in range(0, len(handles), TRASH_BATCH_SIZE):
            chunk = handles[start:start + TRASH_BATCH_SIZE]
            try:
                _execute_batch_modify(self.service, chunk)
            except HttpError as e:
                raise StoreDeleteError(
                    f"Trashing failed after {trashed} of {len(handles)} messages: {e}",
                    trashed=trashed,
                ) from e
            trashed += len(chunk)
            logger.debug("Trashed %d/%d messages", trashed, len(handles))
        return trashed
