"""
Client-side mirror of the task list and its rendering helpers.

``TaskMirror`` is the presentation layer's cached copy of the store's
last known list. It is only ever changed through ``refresh``,
``add_local``, ``toggle_local`` and ``remove_local``, each called after
the store has confirmed the matching operation.

``render_tasks``, ``format_stats`` and ``format_date`` are the client
library's rendering API for code that drives a ``TaskBoard``; the
server-rendered index page uses its own Jinja template and only borrows
``format_date`` and ``format_stats``.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from markupsafe import Markup, escape

EMPTY_STATE_HTML = Markup(
    '<div class="empty-state">'
    "<h3>No tasks yet!</h3>"
    "<p>Add your first task above to get started.</p>"
    "</div>"
)


@dataclass
class TaskMirror:
    """Ordered local copy of the task list, newest first."""

    tasks: list[dict[str, Any]] = field(default_factory=list)

    def refresh(self, tasks: list[dict[str, Any]]) -> None:
        """Replace the mirror wholesale with a fresh listing."""
        self.tasks = [dict(task) for task in tasks]

    def add_local(self, task: dict[str, Any]) -> None:
        """Insert a newly created task at the front."""
        self.tasks.insert(0, dict(task))

    def toggle_local(self, task_id: int) -> None:
        """Flip the completed flag of a cached task; unknown ids are ignored."""
        for task in self.tasks:
            if task["id"] == task_id:
                task["completed"] = not task["completed"]
                return

    def remove_local(self, task_id: int) -> None:
        """Drop a cached task."""
        self.tasks = [task for task in self.tasks if task["id"] != task_id]

    def get(self, task_id: int) -> dict[str, Any] | None:
        for task in self.tasks:
            if task["id"] == task_id:
                return task
        return None

    @property
    def total(self) -> int:
        return len(self.tasks)

    @property
    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task["completed"])


def format_date(value: str | None) -> str:
    """
    Format an ISO-8601 ``created_at`` string for display.

    Returns:
        Text such as ``"Jan 5, 09:30 AM"`` (UTC), or ``""`` when the value
        is missing or unparseable.
    """
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return ""
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    parsed = parsed.astimezone(timezone.utc)
    return f"{parsed:%b} {parsed.day}, {parsed:%I:%M %p}"


def format_stats(mirror: TaskMirror) -> tuple[str, str]:
    """Return the task-count and completed-count labels."""
    total = mirror.total
    plural = "" if total == 1 else "s"
    return f"{total} task{plural}", f"{mirror.completed_count} completed"


def render_tasks(mirror: TaskMirror) -> Markup:
    """
    Render the task list as an HTML fragment.

    Titles are HTML-escaped; an empty mirror renders the empty-state block.
    """
    if not mirror.tasks:
        return EMPTY_STATE_HTML

    items = []
    for task in mirror.tasks:
        state = " completed" if task["completed"] else ""
        checked = " checked" if task["completed"] else ""
        items.append(Markup(
            '<div class="task-item{state}" data-task-id="{id}">'
            '<div class="task-checkbox{checked}"></div>'
            '<div class="task-title{state}">{title}</div>'
            '<div class="task-date">{date}</div>'
            "</div>"
        ).format(
            state=state,
            checked=checked,
            id=task["id"],
            title=task["title"],
            date=format_date(task.get("created_at")),
        ))
    return Markup("").join(items)
