"""
Database models for the Task Manager application.

This module defines SQLAlchemy models representing the data structure
of the application. Each model maps to a database table.
"""

from datetime import datetime, timezone
from typing import Any

from app import db


class Task(db.Model):
    """
    Task model representing a to-do item.

    Attributes:
        id: Unique identifier, never reused after deletion.
        title: Trimmed task title (1-200 characters).
        completed: Whether the task has been marked done.
        created_at: Timestamp when the task was created.
    """

    __tablename__ = "tasks"
    # AUTOINCREMENT keeps SQLite from handing out ids of deleted rows again
    __table_args__ = {"sqlite_autoincrement": True}

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(200), nullable=False)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    @staticmethod
    def _to_utc_iso(value: datetime | None) -> str | None:
        """
        Convert datetime to an ISO-8601 UTC string.

        SQLite commonly returns naive datetime values even when timezone-aware
        columns are declared. For API contracts, always normalize to UTC.
        """
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        else:
            value = value.astimezone(timezone.utc)
        return value.isoformat()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the task to its JSON representation.

        Returns:
            Dictionary with id, title, completed and created_at.
        """
        return {
            "id": self.id,
            "title": self.title,
            "completed": bool(self.completed),
            "created_at": self._to_utc_iso(self.created_at),
        }

    def __repr__(self) -> str:
        """Return string representation of the task."""
        return f"<Task {self.id}: {self.title}>"
