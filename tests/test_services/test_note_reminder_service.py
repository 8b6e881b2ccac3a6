# tests/test_services/test_note_reminder_service.py
import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.database import Base
from user.models import User, UserRole
from note import service as notes
from note.models import PersonalNote
from note.schema import NoteCreatePayload, NoteUpdate
from reminder import service as reminders
from reminder.models import Reminder
from reminder.schema import ReminderCreatePayload, ReminderUpdate
import models_bootstrap


class NoteServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        ann = User(email="ann@acme.co.za", name="Ann", password_hash="x", role=UserRole.employee)
        ben = User(email="ben@acme.co.za", name="Ben", password_hash="x", role=UserRole.employee)
        self.db.add_all([ann, ben])
        self.db.commit()
        self.ann_id, self.ben_id = ann.id, ben.id

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_create_defaults(self):
        n = notes.create_note(self.db, self.ann_id, NoteCreatePayload(content="buy milk"))
        self.assertEqual(n.color, "default")
        self.assertIsNone(n.title)
        self.assertIsNotNone(n.updated_at)

    def test_list_only_own(self):
        notes.create_note(self.db, self.ann_id, NoteCreatePayload(content="mine"))
        notes.create_note(self.db, self.ben_id, NoteCreatePayload(content="his"))
        self.assertEqual([n.content for n in notes.get_notes(self.db, user_id=self.ann_id)], ["mine"])

    def test_update_bumps_to_top(self):
        first = notes.create_note(self.db, self.ann_id, NoteCreatePayload(content="first"))
        second = notes.create_note(self.db, self.ann_id, NoteCreatePayload(content="second"))
        # pin the original timestamps so the bump is observable
        first.updated_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        second.updated_at = datetime(2025, 1, 2, tzinfo=timezone.utc)
        self.db.commit()
        self.assertEqual([n.id for n in notes.get_notes(self.db, user_id=self.ann_id)], [second.id, first.id])

        notes.update_note(self.db, first.id, NoteUpdate(color="yellow"))
        listed = notes.get_notes(self.db, user_id=self.ann_id)
        self.assertEqual([n.id for n in listed], [first.id, second.id])
        self.assertEqual(listed[0].color, "yellow")
        self.assertEqual(listed[0].content, "first")

    def test_delete_and_owner_cascade(self):
        n = notes.create_note(self.db, self.ann_id, NoteCreatePayload(content="x"))
        notes.delete_note(self.db, n.id)
        self.assertIsNone(notes.get_note(self.db, n.id))

        notes.create_note(self.db, self.ann_id, NoteCreatePayload(content="y"))
        self.db.delete(self.db.get(User, self.ann_id))
        self.db.commit()
        self.assertEqual(self.db.query(PersonalNote).count(), 0)


class ReminderServiceTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        TestingSession = sessionmaker(bind=self.engine, future=True)
        self.db = TestingSession()

        ann = User(email="ann@acme.co.za", name="Ann", password_hash="x", role=UserRole.employee)
        self.db.add(ann)
        self.db.commit()
        self.ann_id = ann.id
        self.base = datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def _make(self, title, days):
        return reminders.create_reminder(
            self.db, self.ann_id, ReminderCreatePayload(title=title, reminder_date=self.base + timedelta(days=days))
        )

    def test_incomplete_first_then_soonest(self):
        later = self._make("later", 5)
        sooner = self._make("sooner", 1)
        done = self._make("done", 0)
        reminders.update_reminder(self.db, done.id, ReminderUpdate(is_completed=True))
        ids = [r.id for r in reminders.get_reminders(self.db, user_id=self.ann_id)]
        self.assertEqual(ids, [sooner.id, later.id, done.id])

    def test_update_partial(self):
        r = self._make("call", 1)
        out = reminders.update_reminder(self.db, r.id, ReminderUpdate(priority="high", title=None))
        self.assertEqual(out.priority, "high")
        self.assertEqual(out.title, "call")
        self.assertFalse(out.is_completed)

    def test_delete(self):
        r = self._make("x", 1)
        reminders.delete_reminder(self.db, r.id)
        self.assertIsNone(reminders.get_reminder(self.db, r.id))
        self.assertEqual(self.db.query(Reminder).count(), 0)


if __name__ == "__main__":
    unittest.main()
