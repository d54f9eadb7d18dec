"""
HTTP client for the task API and the presentation controller built on it.

``TaskApiClient`` wraps the JSON endpoints with :mod:`requests`.
``TaskBoard`` binds a client to a :class:`~app.mirror.TaskMirror`: it
runs one user action at a time, patches the mirror only after the store
confirms success, and turns every failure into a transient ``Notice``.
``LivenessProbe`` polls ``/health`` in the background; its result is
advisory and never touches task state.

Key Concepts Demonstrated:
- Centralised request helper with per-call timeout
- Error message extraction from JSON error bodies
- Explicit state object instead of module-level globals
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any

import requests

from app.mirror import TaskMirror
from app.validation import TITLE_MAX_LENGTH, validate_title
from config import get_config

logger = logging.getLogger(__name__)


class TaskApiError(Exception):
    """A task API call failed at the network or HTTP level."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _response_error_message(response: requests.Response, default: str) -> str:
    """
    Extract an error message from a JSON API response if possible.

    Falls back to *default* when the body is not JSON or carries no
    usable ``error`` field.
    """
    try:
        payload = response.json()
    except ValueError:
        return default
    if not isinstance(payload, dict):
        return default
    message = payload.get("error")
    if isinstance(message, str) and message.strip():
        return message
    return default


class TaskApiClient:
    """Thin wrapper around the task API endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _call(self, method: str, path: str, default_error: str, **kwargs) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            TaskApiError: On connection failure, timeout, or a non-2xx
                response; the message comes from the body when present.
        """
        try:
            response = self.session.request(
                method=method,
                url=self._url(path),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.error(f"{method} {path} failed: {exc}")
            raise TaskApiError(default_error) from exc

        if not response.ok:
            message = _response_error_message(response, default_error)
            logger.warning(f"{method} {path} returned {response.status_code}: {message}")
            raise TaskApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise TaskApiError(default_error, status_code=response.status_code) from exc

    def list_tasks(self) -> list[dict[str, Any]]:
        return self._call("GET", "/api/tasks", "Failed to load tasks")

    def create_task(self, title: str) -> dict[str, Any]:
        return self._call(
            "POST",
            "/api/tasks",
            "Failed to add task. Please try again.",
            json={"title": title},
        )

    def toggle_task(self, task_id: int) -> None:
        self._call(
            "PUT",
            f"/api/tasks/{task_id}/toggle",
            "Failed to update task. Please try again.",
        )

    def delete_task(self, task_id: int) -> None:
        self._call(
            "DELETE",
            f"/api/tasks/{task_id}",
            "Failed to delete task. Please try again.",
        )

    def health_check(self) -> bool:
        """Return True when the backend reports itself healthy."""
        try:
            health = self._call("GET", "/health", "Health check failed")
        except TaskApiError:
            return False
        return isinstance(health, dict) and health.get("status") == "healthy"


@dataclass
class Notice:
    """A user-visible message that disappears after ``timeout`` seconds."""

    message: str
    timeout: float = 5
    shown_at: float = field(default_factory=time.monotonic)

    def is_visible(self, now: float | None = None) -> bool:
        if now is None:
            now = time.monotonic()
        return now - self.shown_at < self.timeout


class TaskBoard:
    """
    Event handlers for the task page.

    Each handler returns True on success. On failure the mirror is left
    as it was and ``notice`` holds the message to show the user.
    """

    def __init__(
        self,
        client: TaskApiClient,
        mirror: TaskMirror | None = None,
        notice_timeout: float = 5,
    ):
        self.client = client
        self.mirror = mirror if mirror is not None else TaskMirror()
        self.notice_timeout = notice_timeout
        self.notice: Notice | None = None

    def _fail(self, message: str) -> bool:
        self.notice = Notice(message, timeout=self.notice_timeout)
        return False

    def dismiss_notice(self) -> None:
        self.notice = None

    def visible_notice(self) -> str | None:
        """Return the current message unless it was dismissed or expired."""
        if self.notice is None or not self.notice.is_visible():
            return None
        return self.notice.message

    def load(self) -> bool:
        try:
            tasks = self.client.list_tasks()
        except TaskApiError as error:
            logger.error(f"Error loading tasks: {error.message}")
            return self._fail("Failed to load tasks. Please refresh the page.")
        self.mirror.refresh(tasks)
        return True

    def add(self, raw_title: str) -> bool:
        title = raw_title.strip() if isinstance(raw_title, str) else ""
        if not title:
            return self._fail("Please enter a task title")
        if len(title) > TITLE_MAX_LENGTH:
            return self._fail(f"Task title must be {TITLE_MAX_LENGTH} characters or less")
        is_valid, error = validate_title(title)
        if not is_valid:
            return self._fail(error)

        try:
            task = self.client.create_task(title)
        except TaskApiError as error:
            return self._fail(error.message)

        self.mirror.add_local(task)
        self.dismiss_notice()
        logger.info(f"Task added successfully: {task['title']}")
        return True

    def toggle(self, task_id: int) -> bool:
        try:
            self.client.toggle_task(task_id)
        except TaskApiError as error:
            return self._fail(error.message)
        self.mirror.toggle_local(task_id)
        logger.info(f"Task toggled successfully: {task_id}")
        return True

    def delete(self, task_id: int) -> bool:
        try:
            self.client.delete_task(task_id)
        except TaskApiError as error:
            return self._fail(error.message)
        self.mirror.remove_local(task_id)
        logger.info(f"Task deleted successfully: {task_id}")
        return True


class LivenessProbe:
    """Poll the backend health endpoint on a daemon thread."""

    def __init__(self, client: TaskApiClient, interval: float = 30):
        self.client = client
        self.interval = interval
        self.last_healthy: bool | None = None
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def check_once(self) -> bool:
        healthy = self.client.health_check()
        if healthy != self.last_healthy:
            logger.info(f"Health check: {'healthy' if healthy else 'unreachable'}")
        self.last_healthy = healthy
        return healthy

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.check_once()

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="liveness-probe", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval)
            self._thread = None


def create_board(config_name: str | None = None) -> tuple[TaskBoard, LivenessProbe]:
    """
    Build a task board and its liveness probe from application config.

    Args:
        config_name: Configuration environment name. If None, uses the
            FLASK_ENV environment variable.

    Returns:
        The board (with an empty mirror) and an unstarted probe sharing
        the same API client.
    """
    config_class = get_config(config_name)
    client = TaskApiClient(config_class.TASK_API_URL, timeout=config_class.TASK_API_TIMEOUT)
    board = TaskBoard(client, notice_timeout=config_class.NOTICE_TIMEOUT)
    probe = LivenessProbe(client, interval=config_class.HEALTH_CHECK_INTERVAL)
    return board, probe
