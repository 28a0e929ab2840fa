"""Gmail API client."""
import base64
import logging
import re
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from bs4 import BeautifulSoup
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from job_tracker.parsing.models import NormalizedEmail

from .auth import GmailAuth

logger = logging.getLogger(__name__)

# Subject phrases per category, plus mail sent from ATS platforms
JOB_QUERIES = [
    'subject:("application received" OR "thank you for applying" OR "application confirmation")',
    'subject:("unfortunately" OR "not moving forward" OR "other candidates" OR "position has been filled")',
    'subject:("interview" OR "phone screen" OR "schedule a call" OR "next steps")',
    'subject:("offer letter" OR "job offer" OR "we are pleased")',
    "from:(greenhouse.io OR lever.co OR workday.com OR icims.com OR myworkdayjobs.com "
    "OR smartrecruiters.com OR ashbyhq.com)",
]

PAGE_SIZE = 50
# Gmail batchModify accepts at most 1000 ids per call
MODIFY_BATCH_SIZE = 1000


def build_job_query(after: datetime) -> str:
    """Combine the job queries with an epoch-seconds lower bound."""
    return f"({' OR '.join(JOB_QUERIES)}) after:{int(after.timestamp())}"


def decode_base64url(data: str) -> str:
    """Decode Gmail's unpadded base64url payloads."""
    missing_padding = len(data) % 4
    if missing_padding:
        data += "=" * (4 - missing_padding)
    return base64.urlsafe_b64decode(data).decode("utf-8", errors="replace")


def html_to_text(html: str) -> str:
    """Flatten HTML to a single line of text without scripts or styles."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["style", "script"]):
        tag.decompose()
    return re.sub(r"\s+", " ", soup.get_text(" ")).strip()


class GmailClient:
    """Gmail API client for fetching and labeling job emails."""

    def __init__(self, auth: GmailAuth, processed_label: str = "JobTracker/Processed"):
        """
        Initialize Gmail client.

        Args:
            auth: GmailAuth instance for authentication
            processed_label: Label name applied to processed messages
        """
        self.auth = auth
        self.processed_label = processed_label
        self._service = None
        self._label_id: Optional[str] = None

    def _get_service(self):
        """Get or create Gmail API service."""
        if self._service is None:
            self._service = build("gmail", "v1", credentials=self.auth.get_credentials())
        return self._service

    def fetch_job_emails(self, after: datetime) -> list[NormalizedEmail]:
        """
        Fetch job-related emails received after a timestamp.

        Args:
            after: Only messages after this moment are returned

        Returns:
            Decoded emails, in the order Gmail lists them
        """
        service = self._get_service()
        query = build_job_query(after)
        logger.info("Fetching emails after %s", after.isoformat())
        logger.debug("Full query: %s", query)

        emails: list[NormalizedEmail] = []
        page_token = None

        while True:
            response = (
                service.users()
                .messages()
                .list(userId="me", q=query, maxResults=PAGE_SIZE, pageToken=page_token)
                .execute()
            )

            messages = response.get("messages", [])
            logger.info("Found %d messages in this page", len(messages))

            for msg in messages:
                if not msg.get("id"):
                    continue
                email = self.get_message(msg["id"])
                if email:
                    emails.append(email)

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        logger.info("Total job emails fetched: %d", len(emails))
        return emails

    def get_message(self, message_id: str) -> Optional[NormalizedEmail]:
        """
        Get and decode a single message.

        Args:
            message_id: Gmail message ID

        Returns:
            NormalizedEmail or None if the message could not be fetched or decoded
        """
        service = self._get_service()

        try:
            data = (
                service.users()
                .messages()
                .get(userId="me", id=message_id, format="full")
                .execute()
            )
            return self._parse_message(data)

        except (HttpError, KeyError, ValueError) as e:
            logger.error("Failed to parse message %s: %s", message_id, e)
            return None

    def _parse_message(self, data: dict) -> NormalizedEmail:
        """Turn a raw Gmail API message into a NormalizedEmail."""
        payload = data.get("payload", {})
        headers = {h["name"].lower(): h["value"] for h in payload.get("headers", [])}

        body_text, body_html = self._extract_body(payload)

        return NormalizedEmail(
            id=data["id"],
            thread_id=data.get("threadId") or data["id"],
            sender=headers.get("from", ""),
            subject=headers.get("subject", ""),
            date=self._message_date(headers.get("date", ""), data.get("internalDate")),
            body=html_to_text(body_html) if body_html else body_text,
            html_body=body_html or None,
        )

    @staticmethod
    def _message_date(date_header: str, internal_date: Optional[str]) -> str:
        """Render the Date header (or Gmail's internal date) as ISO-8601 UTC."""
        try:
            sent_at = parsedate_to_datetime(date_header)
        except (TypeError, ValueError):
            if not internal_date:
                raise ValueError(f"Unparseable Date header: {date_header!r}")
            sent_at = datetime.fromtimestamp(int(internal_date) / 1000, tz=timezone.utc)

        if sent_at.tzinfo is None:
            sent_at = sent_at.replace(tzinfo=timezone.utc)
        return sent_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

    def _extract_body(self, payload: dict) -> tuple[str, str]:
        """Extract text and HTML bodies; later parts win over earlier ones."""
        body_text = ""
        body_html = ""

        def extract_parts(part: dict):
            nonlocal body_text, body_html

            mime_type = part.get("mimeType", "")
            data = part.get("body", {}).get("data")

            if data and mime_type == "text/plain":
                body_text = decode_base64url(data)
            elif data and mime_type == "text/html":
                body_html = decode_base64url(data)

            for child in part.get("parts", []):
                extract_parts(child)

        extract_parts(payload)
        return body_text, body_html

    def label_as_processed(self, message_ids: list[str]) -> None:
        """
        Apply the processed label so messages are not picked up again.

        Args:
            message_ids: IDs of messages that were stored successfully
        """
        if not message_ids:
            return

        label_id = self._get_or_create_label()
        service = self._get_service()

        for i in range(0, len(message_ids), MODIFY_BATCH_SIZE):
            batch = message_ids[i:i + MODIFY_BATCH_SIZE]
            service.users().messages().batchModify(
                userId="me",
                body={"ids": batch, "addLabelIds": [label_id]},
            ).execute()

        logger.info("Labeled %d emails as processed", len(message_ids))

    def _get_or_create_label(self) -> str:
        """Look up the processed label, creating it on first use."""
        if self._label_id:
            return self._label_id

        service = self._get_service()
        labels = service.users().labels().list(userId="me").execute().get("labels", [])
        existing = next((l for l in labels if l.get("name") == self.processed_label), None)

        if existing:
            self._label_id = existing["id"]
        else:
            created = service.users().labels().create(
                userId="me",
                body={
                    "name": self.processed_label,
                    "labelListVisibility": "labelShow",
                    "messageListVisibility": "show",
                },
            ).execute()
            self._label_id = created["id"]
            logger.info("Created Gmail label %s", self.processed_label)

        return self._label_id
