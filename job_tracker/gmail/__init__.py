"""Gmail integration for fetching and labeling job emails."""
from .auth import GmailAuth
from .client import GmailClient

__all__ = ["GmailAuth", "GmailClient"]
