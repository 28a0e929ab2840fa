#!/usr/bin/env python3
"""One-time setup: obtain a Gmail refresh token for the tracker.

Prerequisites:
    1. Create OAuth 2.0 credentials (Desktop app) in Google Cloud Console
    2. Enable the Gmail API for the project
    3. Put GMAIL_CLIENT_ID and GMAIL_CLIENT_SECRET in .env

Usage:
    python -m scripts.setup_gmail
"""
import logging
import sys

from scripts.bootstrap import settings
from job_tracker.exceptions import GmailAuthError
from job_tracker.gmail.auth import GmailAuth
from job_tracker.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main():
    """Run the consent flow and print the refresh token."""
    setup_logging()

    print("Gmail OAuth Setup")
    print("=" * 50)
    print()

    auth = GmailAuth(
        client_id=settings.gmail_client_id,
        client_secret=settings.gmail_client_secret,
        redirect_uri=settings.gmail_redirect_uri,
    )

    print("A browser window will open for authentication.")
    print()

    try:
        credentials = auth.run_consent_flow()
    except GmailAuthError as e:
        logger.error("%s", e)
        return 1

    if not credentials.refresh_token:
        logger.error("No refresh token returned. Revoke the app's access and try again.")
        return 1

    logger.info("Authentication successful!")
    print()
    print("Add this to your .env file:")
    print()
    print(f"GMAIL_REFRESH_TOKEN={credentials.refresh_token}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
