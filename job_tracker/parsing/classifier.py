"""Rule-based email classification."""
import logging
import re

from .models import EmailCategory, NormalizedEmail

logger = logging.getLogger(__name__)


class EmailClassifier:
    """Assign a category to an email using ordered pattern groups.

    Groups are checked in table order and the first group with any matching
    pattern wins. Offer and interview signals come first because a rejection
    or confirmation often quotes them (e.g. "Re: Interview with Acme").
    """

    CATEGORY_PATTERNS: list[tuple[EmailCategory, list[str]]] = [
        (
            EmailCategory.OFFER,
            [
                r"offer letter",
                r"job offer",
                r"we are pleased to offer",
                r"extend an offer",
                r"offer of employment",
                r"congratulations.*offer",
            ],
        ),
        (
            EmailCategory.INTERVIEW_INVITATION,
            [
                r"schedule.*interview",
                r"interview.*schedule",
                r"phone screen",
                r"invite you to interview",
                r"like to schedule",
                r"next steps.*interview",
                r"technical assessment",
                r"coding challenge",
                r"take-home",
                r"onsite interview",
                r"virtual interview",
                r"meet the team",
            ],
        ),
        (
            EmailCategory.REJECTION,
            [
                r"unfortunately",
                r"not moving forward",
                r"other candidates",
                r"position has been filled",
                r"decided not to proceed",
                r"will not be moving",
                r"not be able to offer",
                r"pursue other candidates",
                r"after careful consideration",
                r"regret to inform",
                r"won't be moving forward",
            ],
        ),
        (
            EmailCategory.APPLICATION_CONFIRMATION,
            [
                r"application.*received",
                r"thank you for applying",
                r"application.*submitted",
                r"we received your application",
                r"application confirmation",
                r"successfully applied",
                r"application.*review",
            ],
        ),
        (
            EmailCategory.FOLLOW_UP,
            [
                r"following up",
                r"checking in",
                r"update on your application",
                r"status.*application",
                r"wanted to reach out",
            ],
        ),
    ]

    def __init__(self):
        self._rules = [
            (category, [re.compile(p, re.IGNORECASE) for p in patterns])
            for category, patterns in self.CATEGORY_PATTERNS
        ]

    def classify(self, email: NormalizedEmail) -> EmailCategory:
        """Return the category of the first pattern group that matches."""
        text = f"{email.subject or ''} {email.body or ''}"

        for category, patterns in self._rules:
            if any(p.search(text) for p in patterns):
                return category

        return EmailCategory.UNKNOWN


_default_classifier = EmailClassifier()


def classify(email: NormalizedEmail) -> EmailCategory:
    """Classify an email with the default rule table."""
    return _default_classifier.classify(email)


def should_process(email: NormalizedEmail) -> bool:
    """Return True when the email maps to a known category."""
    if classify(email) == EmailCategory.UNKNOWN:
        logger.debug("Skipping unclassified email: %s", email.subject)
        return False
    return True
