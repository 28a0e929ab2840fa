"""Pytest fixtures for job tracker tests."""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from job_tracker.parsing.models import NormalizedEmail
from job_tracker.persistence.models import Base


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture(scope="function")
def empty_db():
    """In-memory database without any tables."""
    engine = create_engine("sqlite:///:memory:")
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


# =============================================================================
# EMAIL FIXTURES
# =============================================================================


@pytest.fixture
def make_email():
    """
    Factory fixture for normalized emails.

    Usage:
        email = make_email(subject="Offer letter", body="...")
    """
    def _make_email(
        id: str = "msg-1",
        thread_id: str = "thread-1",
        sender: str = "no-reply@acme.com",
        subject: str = "",
        date: str = "2024-01-01T12:00:00Z",
        body: str = "",
        html_body: str | None = None,
    ) -> NormalizedEmail:
        return NormalizedEmail(
            id=id,
            thread_id=thread_id,
            sender=sender,
            subject=subject,
            date=date,
            body=body,
            html_body=html_body,
        )

    return _make_email


@pytest.fixture
def confirmation_email(make_email):
    """Application confirmation sent directly by the employer."""
    return make_email(
        id="msg-confirm",
        thread_id="thread-confirm",
        subject="Thank you for applying to Acme Corp",
        date="2024-01-01T00:00:00Z",
        body="We received your application for the Senior Backend Engineer position at Acme Corp.",
    )


@pytest.fixture
def ats_rejection_email(make_email):
    """Rejection relayed through an applicant tracking system."""
    return make_email(
        id="msg-reject",
        thread_id="thread-reject",
        sender='"Greenhouse Recruiting" <no-reply@greenhouse.io>',
        subject="Update on your application — Acme Corp",
        date="2024-01-03T09:30:00Z",
        body=(
            "Unfortunately, we have decided to move forward with other candidates "
            "for the Data Analyst role at Acme Corp."
        ),
    )


@pytest.fixture
def interview_email(make_email):
    """Interview invitation from a company recruiter."""
    return make_email(
        id="msg-interview",
        thread_id="thread-interview",
        sender="Initech Talent <talent@initech.com>",
        subject="Interview for Product Designer",
        date="2024-01-05T15:00:00Z",
        body="We would like to schedule an interview for the Product Designer role at Initech.",
    )


@pytest.fixture
def newsletter_email(make_email):
    """Mail that matches no category."""
    return make_email(
        id="msg-news",
        thread_id="thread-news",
        sender="Weekly Digest <digest@news.example.com>",
        subject="Lunch on Friday?",
        date="2024-01-04T08:00:00Z",
        body="See you there.",
    )
