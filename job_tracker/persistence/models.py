"""SQLAlchemy models for tracked applications."""
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Index, String, Text
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    """Generate a UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TrackedApplication(Base):
    """One job application, kept up to date from incoming emails."""

    __tablename__ = "applications"

    id = Column(String, primary_key=True, default=generate_uuid)
    company = Column(String, nullable=False)
    position = Column(String, nullable=False)
    date_applied = Column(Date)
    status = Column(String, nullable=False, default="Applied")

    salary_range = Column(String)
    location = Column(String)
    job_link = Column(String)
    email_thread_link = Column(String)
    follow_up_date = Column(Date)
    notes = Column(Text)
    source_email = Column(String(2000))  # Subject of the email that created the row

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_applications_company_position", "company", "position"),
    )

    def __repr__(self):
        return f"<TrackedApplication {self.company} - {self.position} ({self.status})>"
