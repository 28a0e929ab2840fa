"""Batch processing of new job emails."""
from .runner import ApplicationStore, MailSource, RunSummary, process_new_emails

__all__ = ["ApplicationStore", "MailSource", "RunSummary", "process_new_emails"]
