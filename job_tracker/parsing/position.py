"""Job title resolution from body and subject."""
import re
from typing import Optional

from .cleaning import (
    MAX_POSITION_LENGTH,
    NOT_A_POSITION_RE,
    collapse_whitespace,
    first_valid,
    has_job_title_keyword,
    is_valid_position,
)
from .company import SUBJECT_SCAN_LIMIT
from .models import UNKNOWN_POSITION, NormalizedEmail

_TITLE = r"([A-Za-z0-9\s/,.-]+?)"

BODY_PATTERNS = [
    # "for the Senior Developer position"
    re.compile(
        r"for\s+the\s+" + _TITLE + r"\s+(?:position|role|opening|opportunity)",
        re.IGNORECASE,
    ),
    # "Position: Senior Developer"
    re.compile(
        r"(?:position|role|job\s*title)\s*[:–-]\s*" + _TITLE
        + r"(?:\s*[.\n,;]|\s+(?:at|with|in|is)\b)",
        re.IGNORECASE,
    ),
    # "applied for the position of Senior Developer at"
    re.compile(
        r"(?:applied|applying)\s+(?:for|to)\s+(?:the\s+)?(?:position\s+of\s+)?" + _TITLE
        + r"(?:\s+(?:position|role|at|with)\b|\s*[.,;])",
        re.IGNORECASE,
    ),
    re.compile(
        r"application\s+for\s+(?:the\s+)?(?:position\s+of\s+)?" + _TITLE
        + r"(?:\s+(?:position|role|at|with|has)\b|\s*[.,;])",
        re.IGNORECASE,
    ),
    # "the Senior Developer role at"
    re.compile(
        r"the\s+" + _TITLE + r"\s+(?:role|position|opening)\s+(?:at|with)\b",
        re.IGNORECASE,
    ),
    re.compile(
        r"interested\s+in\s+(?:the\s+)?(?:position\s+of\s+)?" + _TITLE
        + r"(?:\s+(?:position|role|at|with)\b|\s*[.,;])",
        re.IGNORECASE,
    ),
]

SUBJECT_PATTERNS = [
    # "Application: Senior Developer"
    re.compile(
        r"application\s*[-–:]\s*" + _TITLE + r"(?:\s+(?:at|with|-)\b|\s*$)",
        re.IGNORECASE,
    ),
    # "Senior Developer at Acme"
    re.compile(r"^(?:re:\s*)?" + _TITLE + r"\s+(?:at|@)\s+", re.IGNORECASE),
    re.compile(
        r"application\s+for\s+(?:the\s+)?" + _TITLE + r"(?:\s+(?:at|with)\b|\s*$)",
        re.IGNORECASE,
    ),
    # "Role: Senior Developer"
    re.compile(r"(?:role|position|job)\s*[-–:]\s*([A-Za-z0-9\s/,.-]+)", re.IGNORECASE),
]

REPLY_PREFIX_RE = re.compile(r"^(?:re:|fwd?:|fw:)\s*", re.IGNORECASE)
BOILERPLATE_PREFIX_RE = re.compile(
    r"^(?:application|confirmation|thank you|update|your)\s*[-–:|]\s*",
    re.IGNORECASE,
)
# " - Acme" or "| Acme"; hyphens inside words ("Front-End") are kept
TRAILING_SEGMENT_RE = re.compile(r"\s*(?:\s[-–—]|\|)\s*.+$")


def _first_position(patterns: list[re.Pattern], text: str) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            position = collapse_whitespace(match.group(1))
            if is_valid_position(position):
                return position
    return None


def position_from_body(body: str) -> Optional[str]:
    return _first_position(BODY_PATTERNS, body or "")


def position_from_subject(subject: str) -> Optional[str]:
    return _first_position(SUBJECT_PATTERNS, (subject or "")[:SUBJECT_SCAN_LIMIT])


def position_from_cleaned_subject(subject: str) -> Optional[str]:
    """Use the subject itself when, stripped of boilerplate, it reads like a title."""
    cleaned = REPLY_PREFIX_RE.sub("", (subject or "")[:SUBJECT_SCAN_LIMIT], count=1)
    cleaned = BOILERPLATE_PREFIX_RE.sub("", cleaned, count=1)
    cleaned = TRAILING_SEGMENT_RE.sub("", cleaned, count=1).strip()

    if not cleaned or len(cleaned) >= MAX_POSITION_LENGTH:
        return None
    if not has_job_title_keyword(cleaned) or NOT_A_POSITION_RE.search(cleaned):
        return None
    return cleaned


def resolve_position(email: NormalizedEmail, body: str) -> str:
    """Resolve the job title, falling back to a sentinel."""
    return first_valid([
        lambda: position_from_body(body),
        lambda: position_from_subject(email.subject),
        lambda: position_from_cleaned_subject(email.subject),
    ]) or UNKNOWN_POSITION
