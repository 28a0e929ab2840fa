"""Single-pass extractors for salary, location, job link and dates."""
import re
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from dateutil import parser as dateutil_parser

from .company import is_ats_host
from .models import EmailCategory

SALARY_PATTERNS = [
    re.compile(r"\$[\d,]+\s*[-–to]+\s*\$[\d,]+\s*(?:per\s+(?:year|annum|hr|hour))?", re.IGNORECASE),
    re.compile(r"\$[\d,]+\s*k?\s*[-–to]+\s*\$[\d,]+\s*k?", re.IGNORECASE),
    re.compile(r"salary\s*(?:range)?:?\s*\$[\d,]+", re.IGNORECASE),
    re.compile(r"compensation:?\s*\$[\d,]+", re.IGNORECASE),
]

# Stops at the first character that is not a letter, blank or comma
LOCATION_LABEL_RE = re.compile(
    r"\b(?:location|based in|located in|office in):?[ \t]*([A-Za-z][A-Za-z \t,]*)",
    re.IGNORECASE,
)
WORK_MODE_RE = re.compile(r"\b(?:remote|hybrid|on-?site)\b", re.IGNORECASE)

URL_RE = re.compile(r"https?://[^\s\"'<>()\[\]]+", re.IGNORECASE)
JOB_PATH_RE = re.compile(r"job|career|position|apply|opening", re.IGNORECASE)

FOLLOW_UP_DAYS = {
    EmailCategory.APPLICATION_CONFIRMATION: 7,
    EmailCategory.INTERVIEW_INVITATION: 1,
}


def extract_salary(text: str) -> Optional[str]:
    """Return the first salary mention verbatim."""
    for pattern in SALARY_PATTERNS:
        match = pattern.search(text or "")
        if match:
            return match.group(0).strip()
    return None


def extract_location(text: str) -> Optional[str]:
    """Return a labelled location, else a work mode such as "Remote"."""
    text = text or ""

    match = LOCATION_LABEL_RE.search(text)
    if match:
        location = match.group(1).strip(" \t,")
        if location:
            return location

    match = WORK_MODE_RE.search(text)
    if match:
        return match.group(0)

    return None


def _split_url(url: str) -> tuple[str, str]:
    """Split a URL into host and the remainder after it."""
    rest = url.split("://", 1)[1]
    host, sep, path = rest.partition("/")
    host = re.split(r"[:?#]", host, maxsplit=1)[0]
    return host.lower(), sep + path


def extract_job_link(text: str) -> Optional[str]:
    """Return the leftmost job posting URL, else the leftmost ATS URL."""
    urls = [url.rstrip(".,;:!?") for url in URL_RE.findall(text or "")]

    for url in urls:
        _, path = _split_url(url)
        if JOB_PATH_RE.search(path):
            return url

    for url in urls:
        host, _ = _split_url(url)
        if is_ats_host(host):
            return url

    return None


def parse_email_date(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp into an aware UTC datetime."""
    if not value:
        return None
    try:
        parsed = dateutil_parser.isoparse(value.strip())
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


def follow_up_date(category: EmailCategory, sent_at: Optional[datetime]) -> Optional[date]:
    """Follow up a week after applying and a day after an interview invite."""
    days = FOLLOW_UP_DAYS.get(category)
    if days is None or sent_at is None:
        return None
    try:
        return (sent_at + timedelta(days=days)).date()
    except OverflowError:
        return None
