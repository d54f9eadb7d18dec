"""
API CRUD Tests for Task endpoints.

This module tests list, create, toggle and delete for /api/tasks.
Each test follows the AAA pattern:
- Arrange: Set up test data and preconditions
- Act: Perform the action being tested
- Assert: Verify the expected outcomes
"""

import pytest
import json
from datetime import datetime

pytestmark = pytest.mark.integration


def _create(client, title: str) -> dict:
    response = client.post("/api/tasks", json={"title": title})
    assert response.status_code == 201
    return response.get_json()


class TestListTasks:
    """Tests for GET /api/tasks endpoint."""

    def test_returns_empty_array_when_no_tasks(self, client, db_session):
        # Act
        response = client.get("/api/tasks")

        # Assert
        assert response.status_code == 200
        assert json.loads(response.data) == []

    def test_orders_newest_first(self, client, db_session, dated_tasks):
        # Act
        response = client.get("/api/tasks")

        # Assert
        titles = [task["title"] for task in response.get_json()]
        assert titles == ["Newest", "Middle", "Oldest"]

    def test_tasks_created_in_sequence_list_in_reverse(self, client, db_session):
        # Arrange
        for title in ("A", "B", "C"):
            _create(client, title)

        # Act
        tasks = client.get("/api/tasks").get_json()

        # Assert
        assert [task["title"] for task in tasks] == ["C", "B", "A"]

    def test_equal_timestamps_fall_back_to_id_descending(self, client, task_factory):
        # Arrange
        moment = datetime(2025, 3, 1, 12, 0)
        first = task_factory(title="First", created_at=moment)
        second = task_factory(title="Second", created_at=moment)
        first_id, second_id = first.id, second.id

        # Act
        tasks = client.get("/api/tasks").get_json()

        # Assert
        assert [task["id"] for task in tasks] == [second_id, first_id]


class TestCreateTask:
    """Tests for POST /api/tasks endpoint."""

    def test_create_returns_full_task(self, client, db_session, api_headers):
        # Act
        response = client.post(
            "/api/tasks",
            data=json.dumps({"title": "Buy milk"}),
            headers=api_headers
        )

        # Assert
        assert response.status_code == 201
        data = response.get_json()
        assert set(data) == {"id", "title", "completed", "created_at"}
        assert isinstance(data["id"], int)
        assert data["title"] == "Buy milk"
        assert data["completed"] is False
        datetime.fromisoformat(data["created_at"])

    def test_create_stores_trimmed_title(self, client, db_session):
        # Act
        created = _create(client, "   Walk the dog \t")

        # Assert
        assert created["title"] == "Walk the dog"
        listed = client.get("/api/tasks").get_json()
        assert listed[0]["title"] == "Walk the dog"

    def test_ids_increase(self, client, db_session):
        first = _create(client, "First")
        second = _create(client, "Second")

        assert second["id"] > first["id"]

    def test_ignores_extra_fields(self, client, db_session):
        # Act
        response = client.post(
            "/api/tasks",
            json={"title": "Plain", "completed": True, "id": 999}
        )

        # Assert
        data = response.get_json()
        assert response.status_code == 201
        assert data["completed"] is False
        assert data["id"] != 999


class TestToggleTask:
    """Tests for PUT /api/tasks/<id>/toggle endpoint."""

    def test_toggle_twice_round_trips(self, client, db_session):
        # Arrange
        task_id = _create(client, "Toggle me")["id"]

        # Act / Assert - first toggle completes the task
        response = client.put(f"/api/tasks/{task_id}/toggle")
        assert response.status_code == 200
        assert response.get_json() == {"success": True}
        assert client.get("/api/tasks").get_json()[0]["completed"] is True

        # Act / Assert - second toggle reopens it
        client.put(f"/api/tasks/{task_id}/toggle")
        assert client.get("/api/tasks").get_json()[0]["completed"] is False

    def test_toggle_only_affects_target(self, client, db_session):
        target = _create(client, "Target")
        other = _create(client, "Other")

        client.put(f"/api/tasks/{target['id']}/toggle")

        by_id = {task["id"]: task for task in client.get("/api/tasks").get_json()}
        assert by_id[target["id"]]["completed"] is True
        assert by_id[other["id"]]["completed"] is False

    def test_toggle_missing_task_returns_404(self, client, db_session):
        # Arrange
        _create(client, "Existing")
        before = client.get("/api/tasks").get_json()

        # Act
        response = client.put("/api/tasks/99999/toggle")

        # Assert
        assert response.status_code == 404
        assert response.get_json() == {"error": "Task not found"}
        assert client.get("/api/tasks").get_json() == before


class TestDeleteTask:
    """Tests for DELETE /api/tasks/<id> endpoint."""

    def test_delete_removes_task(self, client, db_session):
        # Arrange
        keep = _create(client, "Keep")
        drop = _create(client, "Drop")

        # Act
        response = client.delete(f"/api/tasks/{drop['id']}")

        # Assert
        assert response.status_code == 200
        assert response.get_json() == {"success": True}
        assert [task["id"] for task in client.get("/api/tasks").get_json()] == [keep["id"]]

    def test_second_delete_returns_404(self, client, db_session):
        # Arrange
        task_id = _create(client, "Once")["id"]
        client.delete(f"/api/tasks/{task_id}")

        # Act
        response = client.delete(f"/api/tasks/{task_id}")

        # Assert
        assert response.status_code == 404
        assert "not found" in response.get_json()["error"].lower()

    def test_delete_missing_task_leaves_list_unchanged(self, client, db_session):
        _create(client, "Survivor")

        response = client.delete("/api/tasks/424242")

        assert response.status_code == 404
        assert len(client.get("/api/tasks").get_json()) == 1


class TestEndToEnd:

    def test_buy_milk_lifecycle(self, client, db_session):
        created = _create(client, "Buy milk")

        tasks = client.get("/api/tasks").get_json()
        assert len(tasks) == 1
        assert tasks[0]["completed"] is False

        client.put(f"/api/tasks/{created['id']}/toggle")
        assert client.get("/api/tasks").get_json()[0]["completed"] is True

        client.delete(f"/api/tasks/{created['id']}")
        assert client.get("/api/tasks").get_json() == []
