"""Email and application record types shared by the classifier and extractors."""
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_POSITION = "Unknown Position"

THREAD_LINK_TEMPLATE = "https://mail.google.com/mail/u/0/#inbox/{thread_id}"


class EmailCategory(str, Enum):
    """Category assigned to a job-related email."""

    APPLICATION_CONFIRMATION = "application_confirmation"
    REJECTION = "rejection"
    INTERVIEW_INVITATION = "interview_invitation"
    OFFER = "offer"
    FOLLOW_UP = "follow_up"
    UNKNOWN = "unknown"


class ApplicationStatus(str, Enum):
    """Status of a tracked application."""

    APPLIED = "Applied"
    PHONE_SCREEN = "Phone Screen"
    INTERVIEW = "Interview"
    TECHNICAL = "Technical"
    OFFER = "Offer"
    REJECTED = "Rejected"
    GHOSTED = "Ghosted"


STATUS_BY_CATEGORY: dict[EmailCategory, ApplicationStatus] = {
    EmailCategory.APPLICATION_CONFIRMATION: ApplicationStatus.APPLIED,
    EmailCategory.REJECTION: ApplicationStatus.REJECTED,
    EmailCategory.INTERVIEW_INVITATION: ApplicationStatus.INTERVIEW,
    EmailCategory.OFFER: ApplicationStatus.OFFER,
    EmailCategory.FOLLOW_UP: ApplicationStatus.APPLIED,
    # Callers filter out unknown emails, the entry keeps the table total.
    EmailCategory.UNKNOWN: ApplicationStatus.APPLIED,
}


@dataclass(frozen=True)
class NormalizedEmail:
    """Decoded email as handed over by the mail retrieval layer."""

    id: str
    thread_id: str
    sender: str
    subject: str
    date: str
    body: str
    html_body: Optional[str] = None


@dataclass(frozen=True)
class ApplicationRecord:
    """Structured application data extracted from one email."""

    company: str
    position: str
    date_applied: Optional[date]
    status: ApplicationStatus
    email_thread_link: str
    notes: str
    source_email: str
    salary_range: Optional[str] = None
    location: Optional[str] = None
    job_link: Optional[str] = None
    follow_up_date: Optional[date] = None


def status_for(category: EmailCategory) -> ApplicationStatus:
    """Map an email category to the application status it implies."""
    return STATUS_BY_CATEGORY[category]


def thread_link(thread_id: str) -> str:
    """Build the Gmail web link for a thread."""
    return THREAD_LINK_TEMPLATE.format(thread_id=thread_id)
