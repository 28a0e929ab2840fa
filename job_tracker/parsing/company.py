"""Company name resolution from body, sender and subject."""
import re
from typing import Optional

from .cleaning import company_candidate, first_valid, is_valid_company
from .models import UNKNOWN_COMPANY, NormalizedEmail

SUBJECT_SCAN_LIMIT = 1000

# Applicant tracking systems that send mail on behalf of employers
ATS_DOMAINS = (
    "greenhouse.io",
    "lever.co",
    "workday.com",
    "myworkdayjobs.com",
    "icims.com",
    "smartrecruiters.com",
    "ashbyhq.com",
    "jobvite.com",
    "bamboohr.com",
    "applytojob.com",
    "recruitee.com",
    "breezy.hr",
    "jazz.co",
    "rippling.com",
)

PERSONAL_MAIL_LABELS = frozenset({
    "gmail", "yahoo", "hotmail", "outlook", "mail", "proton", "icloud",
})

SKIPPED_DOMAIN_LABELS = PERSONAL_MAIL_LABELS | {d.split(".")[0] for d in ATS_DOMAINS}

# Domain labels whose plain title-casing would be wrong
KNOWN_DOMAIN_NAMES = {
    "randstadservices": "Randstad",
    "smartrecruiters": "SmartRecruiters",
    "bamboohr": "BambooHR",
}

GENERIC_SENDER_RE = re.compile(
    r"^(?:no[- ]?reply|do[- ]?not[- ]?reply|recruiting|careers|talent|hr|jobs|"
    r"notifications?|info|support|admin|hello|team|mailer|updates?|alerts?)",
    re.IGNORECASE,
)

SENDER_NAME_RE = re.compile(r'^"?([^"<]+)"?\s*<')
SENDER_DOMAIN_RE = re.compile(r"@([^.>]+)\.")

_NAME = r"([A-Z][A-Za-z0-9\s&.,'-]+?)"

BODY_PATTERNS = [
    # "your application to Acme has been received"
    re.compile(
        r"(?:your\s+)?application\s+(?:to|at|with|for)\s+(?:the\s+)?" + _NAME
        + r"(?:\s+(?:has been|was|is|for the|for a)\b)",
        re.IGNORECASE,
    ),
    # "applying to Acme."
    re.compile(
        r"(?:applying|applied)\s+(?:to|at|with|for)\s+(?:the\s+)?" + _NAME
        + r"(?:\s*[.!,]|\s+(?:for|and|as)\b)",
        re.IGNORECASE,
    ),
    # "interest in (working at) Acme"
    re.compile(
        r"interest\s+in\s+(?:working\s+(?:at|with)\s+)?" + _NAME
        + r"(?:\s*[.!,]|\s+(?:and|we)\b)",
        re.IGNORECASE,
    ),
    re.compile(r"on\s+behalf\s+of\s+" + _NAME + r"(?:\s*[.!,])", re.IGNORECASE),
    # "position at Acme"
    re.compile(
        r"(?:position|role|opportunity)\s+(?:at|with)\s+" + _NAME
        + r"(?:\s*[.!,]|\s+(?:and|has|is|we)\b)",
        re.IGNORECASE,
    ),
    # "Acme has received ..." at the start of a line
    re.compile(
        r"^" + _NAME + r"\s+(?:has\s+received|received|confirms|would like)",
        re.IGNORECASE | re.MULTILINE,
    ),
    re.compile(r"team\s+at\s+" + _NAME + r"(?:\s*[.!,])", re.IGNORECASE),
]

# Case-sensitive: company names in subjects are capitalized
SUBJECT_PATTERNS = [
    re.compile(r"\bat\s+" + _NAME + r"(?:\s*[-–—|!]|\s*$)"),
    re.compile(r"\bfrom\s+" + _NAME + r"(?:\s*[-–—|!]|\s*$)"),
    re.compile(r"\bwith\s+" + _NAME + r"(?:\s*[-–—|!]|\s*$)"),
    # "Acme - Your application"
    re.compile(r"^" + _NAME + r"\s*[-–—|:]\s"),
]


SENDER_ADDRESS_DOMAIN_RE = re.compile(r"@([^\s<>\"]+)")


def is_ats_host(host: str) -> bool:
    """Return True if the host is a known ATS domain or one of its subdomains."""
    host = (host or "").lower().rstrip(".")
    return any(host == domain or host.endswith("." + domain) for domain in ATS_DOMAINS)


def is_ats_sender(sender: str) -> bool:
    """Return True if the sender address belongs to a known ATS."""
    match = SENDER_ADDRESS_DOMAIN_RE.search(sender or "")
    return bool(match) and is_ats_host(match.group(1))


def _first_capture(patterns: list[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            candidate = company_candidate(match.group(1))
            if candidate:
                return candidate
    return None


def company_from_body(body: str) -> Optional[str]:
    return _first_capture(BODY_PATTERNS, body or "")


def company_from_subject(subject: str) -> Optional[str]:
    return _first_capture(SUBJECT_PATTERNS, (subject or "")[:SUBJECT_SCAN_LIMIT])


def company_from_sender(sender: str) -> Optional[str]:
    """Use the display name of the From header unless it is generic."""
    match = SENDER_NAME_RE.match(sender or "")
    if not match:
        return None

    name = match.group(1).strip()
    if GENERIC_SENDER_RE.match(name):
        return None

    return company_candidate(name)


def company_from_domain(sender: str) -> Optional[str]:
    """Derive a company name from the first label of the sender domain."""
    match = SENDER_DOMAIN_RE.search(sender or "")
    if not match:
        return None

    label = match.group(1).lower()
    if label in SKIPPED_DOMAIN_LABELS:
        return None

    name = KNOWN_DOMAIN_NAMES.get(label) or label[:1].upper() + label[1:]
    return name if is_valid_company(name) else None


def resolve_company(email: NormalizedEmail, body: str) -> str:
    """Resolve the company name, preferring sources by sender type.

    ATS sender names are usually the platform ("Greenhouse Recruiting"),
    so body and subject go first there. Direct company mail is best
    identified by its sender name.
    """
    sender = email.sender or ""

    if is_ats_sender(sender):
        strategies = [
            lambda: company_from_body(body),
            lambda: company_from_subject(email.subject),
            lambda: company_from_sender(sender),
            lambda: company_from_domain(sender),
        ]
    else:
        strategies = [
            lambda: company_from_sender(sender),
            lambda: company_from_body(body),
            lambda: company_from_subject(email.subject),
            lambda: company_from_domain(sender),
        ]

    return first_valid(strategies) or UNKNOWN_COMPANY
