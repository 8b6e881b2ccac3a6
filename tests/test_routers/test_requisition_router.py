import unittest
from types import SimpleNamespace as Obj
from unittest.mock import patch
from datetime import date, datetime, timezone
from decimal import Decimal

from fastapi.testclient import TestClient

from main import app
from core.database import get_db
from auth.services.auth_service import get_current_active_user
from requisition.models import RequisitionStatus


def req_obj(id, user_id=2, status=RequisitionStatus.pending, **kw):
    data = dict(
        id=id, user_id=user_id, user_name="Ann", user_email="ann@acme.co.za",
        title="Laptop", description="Dev machine", amount=Decimal("15999.99"), currency="ZAR",
        type="equipment", status=status, priority="normal", requested_date=date(2025, 3, 1),
        required_date=None, justification=None, admin_notes=None, processed_by=None,
        processed_by_name=None, processed_at=None, created_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )
    data.update(kw)
    return Obj(**data)


class RequisitionRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): ...
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=2, role="employee")
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)
        app.dependency_overrides.pop(get_current_active_user, None)

    def as_admin(self):
        app.dependency_overrides[get_current_active_user] = lambda: Obj(id=1, role="admin")

    @patch("requisition.router.service.create_requisition")
    def test_create_for_self(self, mock_create):
        mock_create.return_value = req_obj(1)
        r = self.client.post("/api/requisitions", json={
            "title": "Laptop", "description": "Dev machine", "amount": 15999.99,
            "type": "equipment", "requested_date": "2025-03-01",
        })
        self.assertEqual(r.status_code, 201, r.text)
        self.assertEqual(r.json()["amount"], 15999.99)
        self.assertEqual(mock_create.call_args[0][1].user_id, 2)

    def test_amount_must_be_positive(self):
        r = self.client.post("/api/requisitions", json={
            "title": "Laptop", "description": "x", "amount": 0,
            "type": "equipment", "requested_date": "2025-03-01",
        })
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["fields"][0]["field"], "amount")

    @patch("requisition.router.service.get_requisitions")
    def test_employee_list_scoped(self, mock_list):
        mock_list.return_value = []
        self.client.get("/api/requisitions")
        self.assertEqual(mock_list.call_args.kwargs.get("user_id"), 2)

    @patch("requisition.router.service.get_requisition")
    def test_read_others_forbidden(self, mock_get):
        mock_get.return_value = req_obj(1, user_id=3)
        r = self.client.get("/api/requisitions/1")
        self.assertEqual(r.status_code, 403)

    @patch("requisition.router.service.get_requisition")
    def test_missing_requisition_looks_foreign_to_employee(self, mock_get):
        mock_get.return_value = None
        missing = self.client.get("/api/requisitions/1")
        mock_get.return_value = req_obj(1, user_id=3)
        foreign = self.client.get("/api/requisitions/1")
        self.assertEqual(missing.status_code, 403)
        self.assertEqual(missing.json(), foreign.json())

    @patch("requisition.router.service.delete_requisition")
    @patch("requisition.router.service.get_requisition")
    def test_missing_requisition_delete(self, mock_get, mock_delete):
        mock_get.return_value = None
        self.assertEqual(self.client.delete("/api/requisitions/1").status_code, 403)
        self.as_admin()
        r = self.client.delete("/api/requisitions/1")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json(), {"error": "Requisition not found"})
        mock_delete.assert_not_called()

    def test_status_update_admin_only(self):
        r = self.client.put("/api/requisitions/1/status", json={"status": "approved"})
        self.assertEqual(r.status_code, 403)

    @patch("requisition.router.service.set_status")
    @patch("requisition.router.service.get_requisition")
    def test_admin_status_update(self, mock_get, mock_set):
        self.as_admin()
        mock_get.return_value = req_obj(1)
        mock_set.return_value = req_obj(1, status=RequisitionStatus.approved, processed_by=1, processed_by_name="Ada")
        r = self.client.put("/api/requisitions/1/status", json={"status": "approved", "admin_notes": "ok"})
        self.assertEqual(r.status_code, 200, r.text)
        self.assertEqual(r.json()["status"], "approved")
        self.assertEqual(mock_set.call_args.kwargs["processed_by"], 1)

    def test_invalid_status_400(self):
        self.as_admin()
        r = self.client.put("/api/requisitions/1/status", json={"status": "paid"})
        self.assertEqual(r.status_code, 400)

    @patch("requisition.router.service.delete_requisition")
    @patch("requisition.router.service.get_requisition")
    def test_owner_cannot_delete_processed(self, mock_get, mock_delete):
        mock_get.return_value = req_obj(1, status=RequisitionStatus.approved)
        r = self.client.delete("/api/requisitions/1")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json(), {"error": "Can only delete pending requisitions"})
        mock_delete.assert_not_called()

    @patch("requisition.router.service.delete_requisition")
    @patch("requisition.router.service.get_requisition")
    def test_owner_deletes_pending(self, mock_get, mock_delete):
        mock_get.return_value = req_obj(1)
        r = self.client.delete("/api/requisitions/1")
        self.assertEqual(r.json(), {"message": "Requisition deleted successfully"})

    @patch("requisition.router.service.delete_requisition")
    @patch("requisition.router.service.get_requisition")
    def test_admin_deletes_any_status(self, mock_get, mock_delete):
        self.as_admin()
        mock_get.return_value = req_obj(1, status=RequisitionStatus.completed)
        r = self.client.delete("/api/requisitions/1")
        self.assertEqual(r.status_code, 200)
        mock_delete.assert_called_once()
