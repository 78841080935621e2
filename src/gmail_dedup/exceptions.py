"""Errors raised while scanning or cleaning a folder."""


class DedupError(RuntimeError):
    """Base class for failures that abort a folder's deduplication."""


class StoreReadError(DedupError):
    """Fetching a page of messages from the store failed."""


class StoreDeleteError(DedupError):
    """Moving duplicate messages to the trash failed."""

    def __init__(self, message: str, trashed: int = 0) -> None:
        super().__init__(message)
        self.trashed = trashed  # handles already trashed before the failure


class UnknownFolderError(DedupError):
    """A folder name or id did not match any label."""
