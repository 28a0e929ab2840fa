"""Exceptions raised by the mail, storage and scheduling layers."""


class JobTrackerError(Exception):
    """Base exception for job tracker errors."""

    pass


class GmailAuthError(JobTrackerError):
    """Raised when no usable Gmail credentials are available."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Gmail authentication required: {reason}")


class SchemaVerificationError(JobTrackerError):
    """Raised when the applications table is missing required columns."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Applications table is missing columns: {', '.join(missing)}")
