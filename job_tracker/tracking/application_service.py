"""Application tracking service."""
import logging
from typing import Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from job_tracker.exceptions import SchemaVerificationError
from job_tracker.parsing.models import ApplicationRecord
from job_tracker.persistence.models import TrackedApplication

logger = logging.getLogger(__name__)

MAX_SOURCE_EMAIL_LENGTH = 2000


class ApplicationService:
    """Store extracted application records, merging repeat emails."""

    REQUIRED_COLUMNS = ["company", "position", "date_applied", "status", "source_email"]

    def __init__(self, session: Session):
        """
        Initialize application service.

        Args:
            session: Database session
        """
        self.session = session

    def verify_schema(self) -> bool:
        """Check that the applications table has the columns the tracker writes."""
        try:
            self.ensure_schema()
        except SchemaVerificationError as e:
            logger.error("%s", e)
            logger.info("Required columns: %s", ", ".join(self.REQUIRED_COLUMNS))
            return False

        logger.info("Applications table verified successfully")
        return True

    def ensure_schema(self) -> None:
        """
        Raise if the applications table is missing or incomplete.

        Raises:
            SchemaVerificationError: listing the missing columns
        """
        inspector = inspect(self.session.get_bind())
        if TrackedApplication.__tablename__ not in inspector.get_table_names():
            raise SchemaVerificationError(list(self.REQUIRED_COLUMNS))

        columns = {col["name"] for col in inspector.get_columns(TrackedApplication.__tablename__)}
        missing = [name for name in self.REQUIRED_COLUMNS if name not in columns]
        if missing:
            raise SchemaVerificationError(missing)

    def find_existing(self, company: str, position: str) -> Optional[TrackedApplication]:
        """Find an application with exactly this company and position."""
        stmt = select(TrackedApplication).where(
            TrackedApplication.company == company,
            TrackedApplication.position == position,
        )
        return self.session.execute(stmt).scalars().first()

    def create_or_update(self, record: ApplicationRecord) -> TrackedApplication:
        """
        Insert a new application or merge a record into an existing one.

        Args:
            record: Record extracted from one email

        Returns:
            The created or updated application
        """
        try:
            existing = self.find_existing(record.company, record.position)
            if existing:
                application = self._update(existing, record)
            else:
                application = self._create(record)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        if existing:
            logger.info(
                "Updated application: %s - %s -> %s",
                record.company, record.position, record.status.value,
            )
        else:
            logger.info("Created application: %s - %s", record.company, record.position)

        self.session.refresh(application)
        return application

    def _create(self, record: ApplicationRecord) -> TrackedApplication:
        application = TrackedApplication(
            company=record.company,
            position=record.position,
            date_applied=record.date_applied,
            status=record.status.value,
            salary_range=record.salary_range,
            location=record.location,
            job_link=record.job_link,
            email_thread_link=record.email_thread_link,
            follow_up_date=record.follow_up_date,
            notes=record.notes,
            source_email=record.source_email[:MAX_SOURCE_EMAIL_LENGTH],
        )
        self.session.add(application)
        return application

    def _update(
        self,
        application: TrackedApplication,
        record: ApplicationRecord,
    ) -> TrackedApplication:
        """Refresh status and notes; optional fields only when the record has them.

        The original date applied and source email are kept.
        """
        application.status = record.status.value
        application.notes = record.notes

        if record.follow_up_date:
            application.follow_up_date = record.follow_up_date
        if record.salary_range:
            application.salary_range = record.salary_range
        if record.location:
            application.location = record.location

        return application
