"""Batch classification and extraction."""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from .classifier import classify
from .details import parse_email_date
from .extractor import extract
from .models import ApplicationRecord, EmailCategory, NormalizedEmail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedApplication:
    """A record together with the email and category it came from."""

    email: NormalizedEmail
    category: EmailCategory
    record: ApplicationRecord

    @property
    def sent_at(self) -> Optional[datetime]:
        return parse_email_date(self.email.date)


@dataclass
class IngestResult:
    """Outcome of running the engine over a batch of emails."""

    applications: list[ExtractedApplication] = field(default_factory=list)
    skipped_ids: list[str] = field(default_factory=list)

    @property
    def processed_ids(self) -> list[str]:
        return [item.email.id for item in self.applications]

    @property
    def latest_date(self) -> Optional[datetime]:
        """Latest email date among the extracted applications."""
        dates = [item.sent_at for item in self.applications if item.sent_at]
        return max(dates) if dates else None


def ingest(emails: Iterable[NormalizedEmail]) -> IngestResult:
    """Classify each email once and extract records for the known ones."""
    result = IngestResult()

    for email in emails:
        category = classify(email)
        if category == EmailCategory.UNKNOWN:
            logger.debug("Skipping unclassified email: %s", email.subject)
            result.skipped_ids.append(email.id)
            continue

        record = extract(email, category)
        logger.debug(
            "Extracted [%s] %s - %s", category.value, record.company, record.position
        )
        result.applications.append(ExtractedApplication(email, category, record))

    return result
