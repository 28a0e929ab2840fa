"""Tests for the application tracking service."""
from datetime import date
from unittest.mock import patch

import pytest
from sqlalchemy import Column, MetaData, String, Table
from sqlalchemy.exc import OperationalError

from job_tracker.exceptions import SchemaVerificationError
from job_tracker.parsing.models import ApplicationRecord, ApplicationStatus
from job_tracker.persistence.models import TrackedApplication
from job_tracker.tracking import ApplicationService


def make_record(**overrides) -> ApplicationRecord:
    fields = dict(
        company="Acme",
        position="Senior Backend Engineer",
        date_applied=date(2024, 1, 1),
        status=ApplicationStatus.APPLIED,
        email_thread_link="https://mail.google.com/mail/u/0/#inbox/thread-1",
        notes="Auto-tracked from email: application confirmation",
        source_email="Thank you for applying to Acme Corp",
        follow_up_date=date(2024, 1, 8),
    )
    fields.update(overrides)
    return ApplicationRecord(**fields)


class TestCreateOrUpdate:
    """Upsert semantics keyed on company and position."""

    def test_creates_row(self, test_db):
        service = ApplicationService(test_db)

        app = service.create_or_update(make_record(salary_range="$100k-$120k"))

        assert app.id is not None
        assert app.company == "Acme"
        assert app.status == "Applied"
        assert app.date_applied == date(2024, 1, 1)
        assert app.follow_up_date == date(2024, 1, 8)
        assert app.salary_range == "$100k-$120k"
        assert test_db.query(TrackedApplication).count() == 1

    def test_updates_existing_row(self, test_db):
        service = ApplicationService(test_db)
        created = service.create_or_update(make_record(salary_range="$100k-$120k", location="Remote"))

        updated = service.create_or_update(make_record(
            date_applied=date(2024, 2, 1),
            status=ApplicationStatus.REJECTED,
            notes="Auto-tracked from email: rejection",
            source_email="Update on your application",
            follow_up_date=None,
        ))

        assert updated.id == created.id
        assert test_db.query(TrackedApplication).count() == 1
        assert updated.status == "Rejected"
        assert updated.notes == "Auto-tracked from email: rejection"
        # First email's date and subject are kept
        assert updated.date_applied == date(2024, 1, 1)
        assert updated.source_email == "Thank you for applying to Acme Corp"
        # Optional fields absent from the new record are left alone
        assert updated.salary_range == "$100k-$120k"
        assert updated.location == "Remote"
        assert updated.follow_up_date == date(2024, 1, 8)

    def test_update_overwrites_present_optional_fields(self, test_db):
        service = ApplicationService(test_db)
        service.create_or_update(make_record())

        updated = service.create_or_update(make_record(
            status=ApplicationStatus.INTERVIEW,
            follow_up_date=date(2024, 1, 11),
            location="Denver, CO",
        ))

        assert updated.follow_up_date == date(2024, 1, 11)
        assert updated.location == "Denver, CO"

    def test_match_is_exact(self, test_db):
        service = ApplicationService(test_db)
        service.create_or_update(make_record())
        service.create_or_update(make_record(position="Staff Backend Engineer"))
        service.create_or_update(make_record(company="Initech"))

        assert test_db.query(TrackedApplication).count() == 3

    def test_source_email_truncated(self, test_db):
        app = ApplicationService(test_db).create_or_update(make_record(source_email="x" * 5000))
        assert len(app.source_email) == 2000

    def test_missing_date(self, test_db):
        app = ApplicationService(test_db).create_or_update(make_record(date_applied=None))
        assert app.date_applied is None

    def test_database_error_rolls_back(self, test_db):
        service = ApplicationService(test_db)
        error = OperationalError("INSERT", {}, Exception("disk full"))

        with patch.object(test_db, "commit", side_effect=error):
            with pytest.raises(OperationalError):
                service.create_or_update(make_record())

        assert test_db.query(TrackedApplication).count() == 0


class TestQueries:

    def test_find_existing(self, test_db):
        service = ApplicationService(test_db)
        service.create_or_update(make_record())

        assert service.find_existing("Acme", "Senior Backend Engineer") is not None
        assert service.find_existing("Acme", "Data Analyst") is None


class TestVerifySchema:

    def test_created_schema_passes(self, test_db):
        assert ApplicationService(test_db).verify_schema() is True

    def test_missing_table(self, empty_db):
        service = ApplicationService(empty_db)
        assert service.verify_schema() is False
        with pytest.raises(SchemaVerificationError) as exc_info:
            service.ensure_schema()
        assert exc_info.value.missing == ApplicationService.REQUIRED_COLUMNS

    def test_missing_columns(self, empty_db):
        metadata = MetaData()
        Table(
            "applications",
            metadata,
            Column("id", String, primary_key=True),
            Column("company", String),
            Column("position", String),
        )
        metadata.create_all(bind=empty_db.get_bind())

        with pytest.raises(SchemaVerificationError) as exc_info:
            ApplicationService(empty_db).ensure_schema()

        assert exc_info.value.missing == ["date_applied", "status", "source_email"]
