"""Email classification and application field extraction."""
from .classifier import EmailClassifier, classify, should_process
from .extractor import extract
from .ingest import ExtractedApplication, IngestResult, ingest
from .models import (
    ApplicationRecord,
    ApplicationStatus,
    EmailCategory,
    NormalizedEmail,
    STATUS_BY_CATEGORY,
)

__all__ = [
    "ApplicationRecord",
    "ApplicationStatus",
    "EmailCategory",
    "EmailClassifier",
    "ExtractedApplication",
    "IngestResult",
    "NormalizedEmail",
    "STATUS_BY_CATEGORY",
    "classify",
    "extract",
    "ingest",
    "should_process",
]
