"""Persisted processing watermark."""
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class ProcessingState:
    """Emails dated after the watermark are considered new."""

    last_processed_timestamp: datetime

    def to_dict(self) -> dict:
        return {"last_processed_timestamp": self.last_processed_timestamp.isoformat()}


class StateStore:
    """Load and save the processing state as a JSON file."""

    def __init__(self, path: Path | str, initial_lookback_hours: int = 168):
        """
        Initialize the state store.

        Args:
            path: JSON file holding the state
            initial_lookback_hours: How far back to look when no state exists
        """
        self.path = Path(path)
        self.initial_lookback_hours = initial_lookback_hours

    def load(self, now: Optional[datetime] = None) -> ProcessingState:
        """Read the state, defaulting to the initial lookback window."""
        try:
            if self.path.exists():
                with open(self.path, "r", encoding="utf-8") as f:
                    data = json.load(f)
                timestamp = datetime.fromisoformat(data["last_processed_timestamp"])
                if timestamp.tzinfo is None:
                    timestamp = timestamp.replace(tzinfo=timezone.utc)
                return ProcessingState(last_processed_timestamp=timestamp)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Failed to load state file %s, using default: %s", self.path, e)

        now = now or datetime.now(timezone.utc)
        lookback = now - timedelta(hours=self.initial_lookback_hours)
        return ProcessingState(last_processed_timestamp=lookback)

    def save(self, state: ProcessingState) -> None:
        """Write the state; failures are logged rather than raised."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, indent=2)
        except OSError as e:
            logger.error("Failed to save state file %s: %s", self.path, e)
