"""One processing run: fetch, classify, extract, store, label, advance watermark.

The mail source and the application store are protocols so a run can be
driven by the Gmail client and the SQL service in production and by
in-memory fakes in tests.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from job_tracker.exceptions import GmailAuthError
from job_tracker.parsing import ApplicationRecord, NormalizedEmail, ingest
from job_tracker.state import ProcessingState, StateStore

logger = logging.getLogger(__name__)


@runtime_checkable
class MailSource(Protocol):
    """Where job emails come from and where processed ones get marked."""

    def fetch_job_emails(self, after: datetime) -> list[NormalizedEmail]:
        ...

    def label_as_processed(self, message_ids: list[str]) -> None:
        ...


@runtime_checkable
class ApplicationStore(Protocol):
    """Where extracted application records are written."""

    def create_or_update(self, record: ApplicationRecord):
        ...


@dataclass
class RunSummary:
    """Counts reported at the end of a run."""

    fetched: int = 0
    processed: int = 0
    skipped: int = 0
    errors: int = 0

    def __str__(self) -> str:
        return f"{self.processed} processed, {self.skipped} skipped, {self.errors} errors"


def process_new_emails(
    source: MailSource,
    store: ApplicationStore,
    state_store: StateStore,
) -> RunSummary:
    """
    Process every job email received after the stored watermark.

    Args:
        source: Mail retrieval and labeling collaborator
        store: Application upsert collaborator
        state_store: Watermark persistence

    Returns:
        RunSummary with processed/skipped/error counts

    Raises:
        GmailAuthError: if the mailbox credentials are unusable; other
            fetch failures are logged and yield an empty summary
    """
    state = state_store.load()
    watermark = state.last_processed_timestamp
    logger.info("Processing emails after: %s", watermark.isoformat())

    try:
        emails = source.fetch_job_emails(watermark)
    except GmailAuthError:
        raise
    except Exception as e:
        logger.error("Failed to fetch emails from Gmail: %s", e, exc_info=True)
        return RunSummary()

    summary = RunSummary(fetched=len(emails))
    if not emails:
        logger.info("No new job emails found")
        return summary

    result = ingest(emails)
    summary.skipped = len(result.skipped_ids)

    processed_ids: list[str] = []
    latest = watermark

    for item in result.applications:
        logger.info(
            "Processing: [%s] %s - %s",
            item.category.value, item.record.company, item.record.position,
        )
        try:
            store.create_or_update(item.record)
        except Exception as e:
            summary.errors += 1
            logger.error("Failed to process email: %s: %s", item.email.subject, e, exc_info=True)
            continue

        processed_ids.append(item.email.id)
        sent_at = item.sent_at
        if sent_at and sent_at > latest:
            latest = sent_at

    summary.processed = len(processed_ids)

    try:
        source.label_as_processed(processed_ids)
    except Exception as e:
        logger.error("Failed to label emails as processed: %s", e, exc_info=True)

    state_store.save(ProcessingState(last_processed_timestamp=latest))
    logger.info("Run complete: %s", summary)
    return summary
