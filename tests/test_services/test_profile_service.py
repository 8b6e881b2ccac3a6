# tests/test_services/test_profile_service.py
import unittest
from datetime import date

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
from user.models import User, UserRole
from employeeprofile.models import EmployeeProfile
from employeeprofile import service
from employeeprofile.schema import ProfileUpsert
import models_bootstrap


class ProfileServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        self.zed = User(email="zed@acme.co.za", name="Zed", password_hash="x", role=UserRole.employee)
        self.amy = User(email="amy@acme.co.za", name="Amy", password_hash="x", role=UserRole.admin)
        self.db.add_all([self.zed, self.amy])
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_view_without_profile_has_null_fields(self):
        view = service.get_profile_view(self.db, self.zed)
        self.assertEqual(view["name"], "Zed")
        self.assertFalse(view["has_profile"])
        self.assertIsNone(view["phone"])
        self.assertIsNone(view["country"])

    def test_upsert_creates_then_updates(self):
        view = service.upsert_profile(self.db, self.zed, ProfileUpsert(phone="0821234567", city="Durban"))
        self.assertTrue(view["has_profile"])
        self.assertEqual(view["country"], "South Africa")

        view = service.upsert_profile(self.db, self.zed, ProfileUpsert(city="Cape Town"))
        self.assertEqual(view["city"], "Cape Town")
        self.assertEqual(view["phone"], "0821234567")
        self.assertEqual(self.db.query(EmployeeProfile).count(), 1)

    def test_blank_strings_become_null(self):
        view = service.upsert_profile(self.db, self.zed, ProfileUpsert(phone="   ", date_of_birth=date(1990, 5, 17)))
        self.assertIsNone(view["phone"])
        self.assertEqual(view["date_of_birth"], date(1990, 5, 17))

    def test_all_profiles_ordered_by_name(self):
        service.upsert_profile(self.db, self.zed, ProfileUpsert(phone="1"))
        views = service.list_profile_views(self.db)
        self.assertEqual([v["name"] for v in views], ["Amy", "Zed"])
        self.assertFalse(views[0]["has_profile"])
        self.assertEqual(views[1]["phone"], "1")

    def test_profile_removed_with_user(self):
        service.upsert_profile(self.db, self.zed, ProfileUpsert(phone="1"))
        self.db.delete(self.zed)
        self.db.commit()
        self.assertEqual(self.db.query(EmployeeProfile).count(), 0)


if __name__ == "__main__":
    unittest.main()
