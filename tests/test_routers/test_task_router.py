import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from datetime import datetime, timezone

from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from auth.services.auth_service import get_current_active_user


def task_obj(id, assigned_to=2, **kw):
    data = dict(
        id=id, title="Write report", description=None, status="pending", priority="normal",
        assigned_to=assigned_to, assigned_to_name="Ann", assigned_to_email="ann@acme.co.za",
        created_by=1, created_by_name="Ada Admin", due_date=None,
        created_at=datetime(2025, 1, 1, tzinfo=timezone.utc), completed_at=None,
    )
    data.update(kw)
    return Obj(**data)


class TaskRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): ...
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        # employee Ann (id=2) by default
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=2, role="employee")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    def as_admin(self):
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=1, role="admin")

    @patch("task.router.service.get_tasks")
    def test_employee_list_is_scoped(self, mock_list):
        mock_list.return_value = [task_obj(1)]
        r = self.client.get("/api/tasks")
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(mock_list.call_args.kwargs.get("assigned_to"), 2)

    @patch("task.router.service.get_tasks")
    def test_admin_list_unscoped(self, mock_list):
        self.as_admin()
        mock_list.return_value = []
        self.client.get("/api/tasks")
        self.assertNotIn("assigned_to", mock_list.call_args.kwargs)

    @patch("task.router.service.get_task")
    def test_employee_cannot_read_others(self, mock_get):
        mock_get.return_value = task_obj(1, assigned_to=3)
        r = self.client.get("/api/tasks/1")
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json(), {"error": "Access denied"})

    @patch("task.router.service.get_task")
    def test_missing_task_looks_foreign_to_employee(self, mock_get):
        mock_get.return_value = None
        missing = self.client.get("/api/tasks/1")
        mock_get.return_value = task_obj(1, assigned_to=3)
        foreign = self.client.get("/api/tasks/1")
        self.assertEqual(missing.status_code, 403)
        self.assertEqual(missing.json(), foreign.json())

    @patch("task.router.service.update_task")
    @patch("task.router.service.get_task")
    def test_missing_task_update_403_for_employee(self, mock_get, mock_update):
        mock_get.return_value = None
        r = self.client.put("/api/tasks/1", json={"status": "completed"})
        self.assertEqual(r.status_code, 403)
        mock_update.assert_not_called()

    @patch("task.router.service.get_task")
    def test_missing_404_for_admin(self, mock_get):
        self.as_admin()
        mock_get.return_value = None
        r = self.client.get("/api/tasks/1")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"error": "Task not found"})

    @patch("task.router.service.update_task")
    @patch("task.router.service.get_task")
    def test_employee_update_restricted_to_status(self, mock_get, mock_update):
        mock_get.return_value = task_obj(1)
        mock_update.return_value = task_obj(1, status="completed")
        r = self.client.put("/api/tasks/1", json={"status": "completed", "title": "Hijack"})
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(mock_update.call_args.kwargs["fields"], frozenset({"status"}))

    @patch("task.router.service.update_task")
    @patch("task.router.service.get_task")
    def test_admin_update_unrestricted(self, mock_get, mock_update):
        self.as_admin()
        mock_get.return_value = task_obj(1)
        mock_update.return_value = task_obj(1, title="New")
        self.client.put("/api/tasks/1", json={"title": "New"})
        self.assertIsNone(mock_update.call_args.kwargs["fields"])

    def test_invalid_status_400(self):
        self.as_admin()
        r = self.client.post("/api/tasks", json={"title": "x", "assigned_to": 2, "status": "done"})
        self.assertEqual(r.status_code, 400)

    def test_employee_cannot_create(self):
        r = self.client.post("/api/tasks", json={"title": "x", "assigned_to": 2})
        self.assertEqual(r.status_code, 403)

    @patch("task.router.service.create_task")
    def test_admin_create(self, mock_create):
        self.as_admin()
        mock_create.return_value = task_obj(9)
        r = self.client.post("/api/tasks", json={"title": "Write report", "assigned_to": 2})
        self.assertEqual(r.status_code, 201, r.text)
        self.assertEqual(mock_create.call_args[0][1].created_by, 1)

    @patch("task.router.service.delete_task")
    @patch("task.router.service.get_task")
    def test_admin_delete(self, mock_get, mock_delete):
        self.as_admin()
        mock_get.return_value = task_obj(1)
        r = self.client.delete("/api/tasks/1")
        self.assertEqual(r.json(), {"message": "Task deleted successfully"})
