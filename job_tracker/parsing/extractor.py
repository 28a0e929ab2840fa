"""Build application records from classified emails."""
from .company import resolve_company
from .details import (
    extract_job_link,
    extract_location,
    extract_salary,
    follow_up_date,
    parse_email_date,
)
from .models import (
    ApplicationRecord,
    EmailCategory,
    NormalizedEmail,
    status_for,
    thread_link,
)
from .position import resolve_position

# Long threads quote earlier mails and footers far below the relevant text
BODY_SCAN_LIMIT = 3000


def build_notes(category: EmailCategory) -> str:
    return f"Auto-tracked from email: {category.value.replace('_', ' ')}"


def extract(email: NormalizedEmail, category: EmailCategory) -> ApplicationRecord:
    """
    Extract an application record from an email.

    Every field is resolved independently and degrades to a sentinel or
    None instead of raising.

    Args:
        email: Normalized email
        category: Category returned by the classifier

    Returns:
        ApplicationRecord for the email
    """
    body = (email.body or "")[:BODY_SCAN_LIMIT]
    sent_at = parse_email_date(email.date)

    return ApplicationRecord(
        company=resolve_company(email, body),
        position=resolve_position(email, body),
        date_applied=sent_at.date() if sent_at else None,
        status=status_for(category),
        salary_range=extract_salary(body),
        location=extract_location(body),
        job_link=extract_job_link(email.html_body or body),
        email_thread_link=thread_link(email.thread_id),
        follow_up_date=follow_up_date(category, sent_at),
        notes=build_notes(category),
        source_email=email.subject or "",
    )
