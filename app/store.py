"""
Persistence operations for tasks.

The ``TaskStore`` is the single owner of authoritative task state. It
validates input before touching the database, performs each mutation as
one statement plus one commit, and translates database failures into
``StorageError`` so callers never see SQLAlchemy exceptions.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import delete, not_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import db
from app.errors import StorageError, TaskNotFoundError
from app.models import Task
from app.validation import clean_title, parse_task_id

logger = logging.getLogger(__name__)

# Largest value an SQLite INTEGER primary key can hold
MAX_TASK_ID = 2**63 - 1


class TaskStore:
    """List, create, toggle and delete tasks over a SQLAlchemy session."""

    def __init__(self, session: Session | None = None):
        self.session = session if session is not None else db.session

    @staticmethod
    def _stored_id(raw_id: Any) -> int:
        """Parse a boundary id; ids beyond the key range cannot match a row."""
        task_id = parse_task_id(raw_id)
        if task_id > MAX_TASK_ID:
            raise TaskNotFoundError()
        return task_id

    @contextmanager
    def _storage_guard(self, action: str) -> Iterator[None]:
        """Roll back and raise ``StorageError`` on any database failure."""
        try:
            yield
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error(f"Database error while {action}: {exc}")
            raise StorageError() from exc

    def list_tasks(self) -> list[Task]:
        """Return every task, newest first."""
        stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
        with self._storage_guard("listing tasks"):
            return list(self.session.scalars(stmt).all())

    def create_task(self, title: Any) -> Task:
        """
        Validate a title and persist a new, incomplete task.

        Args:
            title: Raw title value from the caller.

        Returns:
            The stored task with its assigned id and created_at.

        Raises:
            TaskValidationError: If the title is rejected.
            StorageError: If the insert fails.
        """
        task = Task(title=clean_title(title), completed=False)
        with self._storage_guard("creating task"):
            self.session.add(task)
            self.session.commit()
        logger.info(f"Created task with ID: {task.id}")
        return task

    def toggle_task(self, raw_id: Any) -> None:
        """
        Flip the completed flag of one task.

        The flip happens inside a single UPDATE statement so concurrent
        toggles cannot lose each other's writes.

        Raises:
            InvalidTaskIdError: If the id is malformed.
            TaskNotFoundError: If no task has this id.
            StorageError: If the update fails.
        """
        task_id = self._stored_id(raw_id)
        stmt = (
            update(Task)
            .where(Task.id == task_id)
            .values(completed=not_(Task.completed))
            .execution_options(synchronize_session=False)
        )
        with self._storage_guard(f"toggling task {task_id}"):
            result = self.session.execute(stmt)
            self.session.commit()
        if result.rowcount == 0:
            raise TaskNotFoundError()
        logger.info(f"Toggled task {task_id}")

    def delete_task(self, raw_id: Any) -> None:
        """
        Remove one task.

        Raises:
            InvalidTaskIdError: If the id is malformed.
            TaskNotFoundError: If no task has this id.
            StorageError: If the delete fails.
        """
        task_id = self._stored_id(raw_id)
        stmt = delete(Task).where(Task.id == task_id).execution_options(
            synchronize_session=False
        )
        with self._storage_guard(f"deleting task {task_id}"):
            result = self.session.execute(stmt)
            self.session.commit()
        if result.rowcount == 0:
            raise TaskNotFoundError()
        logger.info(f"Deleted task {task_id}")
