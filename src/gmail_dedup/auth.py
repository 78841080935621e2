"""OAuth helpers: build an authenticated Gmail service for the dedup commands."""

from __future__ import annotations

import logging

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from gmail_dedup.constants import CONFIG_DIR, CREDENTIALS_PATH, SCOPES, TOKEN_PATH

logger = logging.getLogger(__name__)


def _load_credentials() -> Credentials:
    creds: Credentials | None = None

    if TOKEN_PATH.exists():
        creds = Credentials.from_authorized_user_file(str(TOKEN_PATH), SCOPES)

    if creds and creds.expired and creds.refresh_token:
        logger.debug("Refreshing expired token %s", TOKEN_PATH)
        creds.refresh(Request())
    elif not creds or not creds.valid:
        if not CREDENTIALS_PATH.exists():
            raise FileNotFoundError(
                f"Credentials file not found at {CREDENTIALS_PATH}.\n"
                "Create an OAuth desktop client in the Google Cloud Console, "
                "enable the Gmail API and save the client secrets as:\n"
                f"  {CREDENTIALS_PATH}"
            )
        logger.info("Starting browser sign-in for %s", CREDENTIALS_PATH)
        flow = InstalledAppFlow.from_client_secrets_file(str(CREDENTIALS_PATH), SCOPES)
        creds = flow.run_local_server(port=0)

    TOKEN_PATH.write_text(creds.to_json())
    return creds


def get_gmail_service() -> Resource:
    """Return a Gmail API service authorized to trash messages.

    The token cached at TOKEN_PATH is reused and refreshed when expired;
    without one the installed-app OAuth flow runs against CREDENTIALS_PATH.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return build("gmail", "v1", credentials=_load_credentials())


def check_auth() -> str | None:
    """Return the authenticated address, or None when sign-in fails."""
    try:
        service = get_gmail_service()
        profile = service.users().getProfile(userId="me").execute()
    except (FileNotFoundError, GoogleAuthError, HttpError) as exc:
        logger.error("Authentication failed: %s", exc)
        return None
    return profile["emailAddress"]
