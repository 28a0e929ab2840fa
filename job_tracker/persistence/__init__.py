"""Database persistence layer."""
from .database import get_session, init_db
from .models import Base, TrackedApplication

__all__ = [
    "Base",
    "TrackedApplication",
    "init_db",
    "get_session",
]
