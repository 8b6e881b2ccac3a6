import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from datetime import datetime, timezone

from fastapi import HTTPException
from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from auth.services.auth_service import get_current_active_user


class AssignmentRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): ...
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=1, role="admin")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    def test_employee_forbidden(self):
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=2, role="employee")
        r = self.client.post("/api/admin/projects/1/assign", json={"user_ids": [2]})
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json(), {"error": "Admin access required"})

    def test_user_ids_must_be_list(self):
        r = self.client.post("/api/admin/projects/1/assign", json={"user_ids": 2})
        self.assertEqual(r.status_code, 400)
        self.assertIn("user_ids must be an array", r.json()["error"])

    @patch("assignment.router.service.replace_project_assignments")
    def test_assign_project(self, mock_replace):
        mock_replace.return_value = [
            Obj(id=2, name="Ann", email="ann@acme.co.za"),
            Obj(id=3, name="Ben", email="ben@acme.co.za"),
        ]
        r = self.client.post("/api/admin/projects/5/assign", json={"user_ids": [2, 3]})
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual([u["id"] for u in r.json()["assigned_users"]], [2, 3])
        mock_replace.assert_called_once()
        self.assertEqual(mock_replace.call_args[0][1:], (5, [2, 3]))

    @patch("assignment.router.service.replace_meeting_assignments")
    def test_empty_list_clears(self, mock_replace):
        mock_replace.return_value = []
        r = self.client.post("/api/admin/meetings/4/assign", json={"user_ids": []})
        self.assertEqual(r.json(), {"assigned_users": []})

    @patch("assignment.router.service.replace_meeting_assignments")
    def test_missing_meeting_404(self, mock_replace):
        mock_replace.side_effect = HTTPException(status_code=404, detail="Meeting not found")
        r = self.client.post("/api/admin/meetings/99/assign", json={"user_ids": [2]})
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"error": "Meeting not found"})

    @patch("assignment.router.service.get_assignments")
    def test_list_project_assignments(self, mock_get):
        mock_get.return_value = [{
            "id": 2, "name": "Ann", "email": "ann@acme.co.za",
            "assigned_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        }]
        r = self.client.get("/api/admin/projects/5/assignments")
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()[0]["name"], "Ann")
        self.assertEqual(mock_get.call_args[0][1:], ("project", 5))
