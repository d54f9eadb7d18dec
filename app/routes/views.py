"""
HTML view routes for the Task Manager web interface.

This module renders the single task page and handles its form posts.
Form handlers run the same store operations as the JSON API and report
failures through flash messages instead of error responses.

Routes:
    GET  /                    - Task list page (home)
    GET  /health              - Liveness probe
    POST /tasks               - Create task from form
    POST /tasks/<id>/toggle   - Toggle task completion
    POST /tasks/<id>/delete   - Delete task
"""

import logging
from datetime import datetime, timezone
from flask import Blueprint, flash, jsonify, redirect, render_template, request, url_for

from app.errors import TaskError
from app.mirror import TaskMirror, format_date, format_stats
from app.store import TaskStore

logger = logging.getLogger(__name__)

views_bp = Blueprint("views", __name__)


@views_bp.route("/health")
def health_check():
    """Liveness probe; carries no task data."""
    return jsonify({
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }), 200


@views_bp.route("/")
def index():
    """
    Render the task list page.

    Returns:
        Rendered index.html template with tasks newest first.
    """
    logger.info("GET / - Rendering task list")

    mirror = TaskMirror()
    try:
        mirror.refresh([task.to_dict() for task in TaskStore().list_tasks()])
    except TaskError as error:
        flash("Failed to load tasks. Please refresh the page.", "error")
        return render_template(
            "index.html", tasks=[], stats=format_stats(mirror), format_date=format_date
        ), error.status_code

    return render_template(
        "index.html",
        tasks=mirror.tasks,
        stats=format_stats(mirror),
        format_date=format_date
    )


@views_bp.route("/tasks", methods=["POST"])
def create_task():
    """Handle new task form submission."""
    logger.info("POST /tasks - Creating task from form")

    try:
        TaskStore().create_task(request.form.get("title"))
    except TaskError as error:
        flash(error.message, "error")
    else:
        flash("Task created successfully", "success")

    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<task_id>/toggle", methods=["POST"])
def toggle_task(task_id: str):
    """Handle the completion checkbox on the task list."""
    logger.info(f"POST /tasks/{task_id}/toggle - Toggling task from form")

    try:
        TaskStore().toggle_task(task_id)
    except TaskError as error:
        flash(error.message, "error")

    return redirect(url_for("views.index"))


@views_bp.route("/tasks/<task_id>/delete", methods=["POST"])
def delete_task(task_id: str):
    """Handle task deletion from the task list."""
    logger.info(f"POST /tasks/{task_id}/delete - Deleting task from form")

    try:
        TaskStore().delete_task(task_id)
    except TaskError as error:
        flash(error.message, "error")
    else:
        flash("Task deleted successfully", "success")

    return redirect(url_for("views.index"))
