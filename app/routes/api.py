"""
REST API endpoints for Task management.

All endpoints return JSON. Failures are reported as ``{"error": "..."}``
with a status code matching the failure class.

Endpoints:
    GET    /api/tasks              - List all tasks, newest first
    POST   /api/tasks              - Create a new task
    PUT    /api/tasks/<id>/toggle  - Flip a task's completed flag
    DELETE /api/tasks/<id>         - Delete a task
"""

import logging
from flask import Blueprint, jsonify, request, Response

from app.errors import TaskError
from app.store import TaskStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List all tasks.

    Returns:
        JSON array of tasks ordered by created_at descending.
    """
    logger.info("GET /api/tasks - Fetching all tasks")

    tasks = TaskStore().list_tasks()
    logger.info(f"Found {len(tasks)} tasks")

    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task.

    Request Body (JSON):
        title: Task title (required, 1-200 characters after trimming)

    Returns:
        JSON response with created task and 201 status code,
        or error message and 400 if validation fails.
    """
    logger.info("POST /api/tasks - Creating new task")

    data = request.get_json(silent=True)
    title = data.get("title") if isinstance(data, dict) else None

    task = TaskStore().create_task(title)
    return jsonify(task.to_dict()), 201


@api_bp.route("/tasks/<task_id>/toggle", methods=["PUT"])
def toggle_task(task_id: str) -> tuple[Response, int]:
    """
    Flip the completed flag of a task.

    Args:
        task_id: Raw id path segment; must be decimal digits only.

    Returns:
        ``{"success": true}`` with 200, 400 for a malformed id,
        or 404 if the task does not exist.
    """
    logger.info(f"PUT /api/tasks/{task_id}/toggle - Toggling task")

    TaskStore().toggle_task(task_id)
    return jsonify({"success": True}), 200


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id: str) -> tuple[Response, int]:
    """
    Delete a task.

    Args:
        task_id: Raw id path segment; must be decimal digits only.

    Returns:
        ``{"success": true}`` with 200, 400 for a malformed id,
        or 404 if the task does not exist.
    """
    logger.info(f"DELETE /api/tasks/{task_id} - Deleting task")

    TaskStore().delete_task(task_id)
    return jsonify({"success": True}), 200


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(TaskError)
def task_error(error: TaskError) -> tuple[Response, int]:
    """Translate task failures into JSON error responses."""
    if error.status_code >= 500:
        logger.error(f"Request failed: {error.message}")
    else:
        logger.warning(f"Request rejected: {error.message}")
    return jsonify({"error": error.message}), error.status_code
