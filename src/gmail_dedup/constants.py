"""Constants for Gmail Dedup."""

from pathlib import Path

# --- Config paths ---
CONFIG_DIR = Path.home() / ".gmail-dedup"
CREDENTIALS_PATH = CONFIG_DIR / "credentials.json"
TOKEN_PATH = CONFIG_DIR / "token.json"

# --- Gmail API ---
SCOPES = ["https://www.googleapis.com/auth/gmail.modify"]
BATCH_SIZE = 50  # messages per BatchHttpRequest
PAGE_SIZE = 500  # messages per list page
TRASH_BATCH_SIZE = 1000  # messages per batchModify call
METADATA_HEADERS = ["Message-ID", "Subject", "Date", "From", "To"]

# --- Identity ---
# Headers hashed into a fallback identity when Message-ID is missing
FALLBACK_IDENTITY_HEADERS = ["From", "To", "Date", "Subject"]
FALLBACK_IDENTITY_DOMAIN = "gmail-dedup.invalid"

# --- Display / logging ---
REPORT_TITLE = "Deduplication Report"
FAILURE_TITLE = "Deduplication Failed"
DEFAULT_LOG_LEVEL = "INFO"
