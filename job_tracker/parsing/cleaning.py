"""Cleaning and validation helpers shared by the field extractors."""
import re
from typing import Callable, Iterable, Optional

MIN_COMPANY_LENGTH = 2
MAX_COMPANY_LENGTH = 80
MIN_POSITION_LENGTH = 3
MAX_POSITION_LENGTH = 100

# Role words that trail a company name in sender names ("Acme Recruiting")
ROLE_SUFFIX_RE = re.compile(
    r"\s+(?:recruiting|careers|talent acquisition|talent|team|hr|jobs|hiring|staffing|notifications?)\s*$",
    re.IGNORECASE,
)

LEGAL_SUFFIX_RE = re.compile(
    r"[\s,]*\b(?:inc|llc|ltd|corp|co)\.?\s*$",
    re.IGNORECASE,
)

COMPANY_STOP_WORDS = frozenset({
    "the", "a", "an", "your", "our", "this", "that", "us", "we",
    "thank", "thanks", "hi", "hello", "dear",
    "application", "confirmation", "update", "status", "re", "fwd",
})

JOB_TITLE_KEYWORDS_RE = re.compile(
    r"\b(?:developer|engineer|designer|analyst|manager|director|coordinator|specialist|"
    r"consultant|administrator|architect|lead|senior|junior|intern|associate|assistant|"
    r"full[- ]?stack|front[- ]?end|back[- ]?end|devops|qa|sre|data|software|web|mobile|"
    r"cloud|product|project|program|marketing|sales|support|operations|it|ux|ui)\b",
    re.IGNORECASE,
)

NOT_A_POSITION_RE = re.compile(
    r"^(?:thank you|thanks|application|confirmation|update|status|their interest|"
    r"your interest|our team|the team|dear|hi|hello|regarding|re|fwd|fw)\b",
    re.IGNORECASE,
)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return " ".join(text.split())


def clean_company_name(name: str) -> str:
    """Strip role and legal suffixes from a company candidate."""
    cleaned = ROLE_SUFFIX_RE.sub("", name)
    cleaned = LEGAL_SUFFIX_RE.sub("", cleaned)
    return collapse_whitespace(cleaned)


def is_valid_company(name: Optional[str]) -> bool:
    """Check length bounds and reject stop words."""
    if not name:
        return False
    if not MIN_COMPANY_LENGTH <= len(name) < MAX_COMPANY_LENGTH:
        return False
    return name.lower() not in COMPANY_STOP_WORDS


def company_candidate(raw: Optional[str]) -> Optional[str]:
    """Clean a raw company capture and return it only if it validates."""
    if not raw:
        return None
    cleaned = clean_company_name(raw)
    return cleaned if is_valid_company(cleaned) else None


def has_job_title_keyword(text: str) -> bool:
    return JOB_TITLE_KEYWORDS_RE.search(text) is not None


def is_valid_position(text: Optional[str]) -> bool:
    """Accept titles with a role keyword, or any title of two or more words."""
    if not text or not MIN_POSITION_LENGTH <= len(text) < MAX_POSITION_LENGTH:
        return False
    if NOT_A_POSITION_RE.search(text):
        return False
    if has_job_title_keyword(text):
        return True
    # "IT Analyst" style titles without keyword overlap
    return len(text.split()) >= 2


def first_valid(
    strategies: Iterable[Callable[[], Optional[str]]],
) -> Optional[str]:
    """Run strategies in order and return the first non-empty result."""
    for strategy in strategies:
        result = strategy()
        if result:
            return result
    return None
