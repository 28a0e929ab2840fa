"""Turn job-search emails into tracked application records."""

__version__ = "1.0.0"
