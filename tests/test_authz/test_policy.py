import unittest

from authz.policy import (
    Action,
    DenyReason,
    Identity,
    Resource,
    Scope,
    authorize,
)

ADMIN = Identity(id=1, role="admin")
ALICE = Identity(id=2, role="employee")
BOB = Identity(id=3, role="employee")


class PolicyBasicsTests(unittest.TestCase):
    def test_anonymous_is_not_authenticated(self):
        for resource in Resource:
            d = authorize(None, Action.read, resource)
            self.assertFalse(d.allowed)
            self.assertEqual(d.reason, DenyReason.not_authenticated)

    def test_decision_is_truthy_only_when_allowed(self):
        self.assertTrue(authorize(ADMIN, Action.create, Resource.project))
        self.assertFalse(authorize(ALICE, Action.create, Resource.project))

    def test_accepts_any_object_with_id_and_role(self):
        class Row:
            id = 1
            role = "admin"
        self.assertTrue(authorize(Row(), Action.delete, Resource.meeting).allowed)


class UserPolicyTests(unittest.TestCase):
    def test_only_admin_lists_and_creates(self):
        self.assertTrue(authorize(ADMIN, Action.list, Resource.user))
        d = authorize(ALICE, Action.list, Resource.user)
        self.assertEqual(d.reason, DenyReason.not_authorized)
        self.assertFalse(authorize(ALICE, Action.create, Resource.user))

    def test_self_read_allowed(self):
        d = authorize(ALICE, Action.read, Resource.user, owner_id=ALICE.id)
        self.assertTrue(d.allowed)
        self.assertEqual(d.scope, Scope.own)
        self.assertFalse(authorize(ALICE, Action.read, Resource.user, owner_id=BOB.id))

    def test_cannot_delete_last_admin(self):
        d = authorize(
            ADMIN, Action.delete, Resource.user, owner_id=ADMIN.id,
            state={"target_role": "admin", "admin_count": 1},
        )
        self.assertFalse(d.allowed)
        self.assertEqual(d.reason, DenyReason.invariant_violation)
        self.assertEqual(d.message, "Cannot delete the last admin user")

    def test_can_delete_admin_when_another_exists(self):
        d = authorize(
            ADMIN, Action.delete, Resource.user, owner_id=9,
            state={"target_role": "admin", "admin_count": 2},
        )
        self.assertTrue(d.allowed)

    def test_cannot_demote_last_admin(self):
        d = authorize(
            ADMIN, Action.update, Resource.user, owner_id=ADMIN.id,
            state={"target_role": "admin", "admin_count": 1, "new_role": "employee"},
        )
        self.assertEqual(d.reason, DenyReason.invariant_violation)
        self.assertEqual(d.message, "Cannot remove the last admin user")

    def test_renaming_last_admin_is_fine(self):
        d = authorize(
            ADMIN, Action.update, Resource.user, owner_id=ADMIN.id,
            state={"target_role": "admin", "admin_count": 1, "new_role": None},
        )
        self.assertTrue(d.allowed)


class SharedRecordPolicyTests(unittest.TestCase):
    def test_projects_and_meetings(self):
        for resource in (Resource.project, Resource.meeting):
            self.assertTrue(authorize(ADMIN, Action.create, resource))
            self.assertFalse(authorize(ALICE, Action.create, resource))
            self.assertFalse(authorize(ALICE, Action.delete, resource))
            self.assertTrue(authorize(ALICE, Action.list, resource))
            self.assertTrue(authorize(ALICE, Action.read, resource))
            # any signed-in user may edit
            self.assertTrue(authorize(ALICE, Action.update, resource))


class CommentPolicyTests(unittest.TestCase):
    def test_anyone_creates_and_lists(self):
        self.assertTrue(authorize(ALICE, Action.create, Resource.comment))
        self.assertTrue(authorize(BOB, Action.list, Resource.comment))

    def test_only_author_edits_or_deletes(self):
        self.assertTrue(authorize(ALICE, Action.update, Resource.comment, owner_id=ALICE.id))
        d = authorize(BOB, Action.delete, Resource.comment, owner_id=ALICE.id)
        self.assertEqual(d.reason, DenyReason.not_owner)
        self.assertEqual(d.message, "Not authorized to delete this comment")

    def test_admin_is_not_an_author(self):
        d = authorize(ADMIN, Action.update, Resource.comment, owner_id=ALICE.id)
        self.assertFalse(d.allowed)
        self.assertEqual(d.message, "Not authorized to update this comment")


class AnnouncementPolicyTests(unittest.TestCase):
    def test_list_scope_by_role(self):
        self.assertEqual(authorize(ADMIN, Action.list, Resource.announcement).scope, Scope.all)
        self.assertEqual(authorize(ALICE, Action.list, Resource.announcement).scope, Scope.targeted)

    def test_writes_admin_only(self):
        for action in (Action.create, Action.update, Action.delete):
            self.assertTrue(authorize(ADMIN, action, Resource.announcement))
            self.assertFalse(authorize(ALICE, action, Resource.announcement))


class RequisitionPolicyTests(unittest.TestCase):
    def test_list_scope(self):
        self.assertEqual(authorize(ADMIN, Action.list, Resource.requisition).scope, Scope.all)
        self.assertEqual(authorize(ALICE, Action.list, Resource.requisition).scope, Scope.own)

    def test_read_own_only(self):
        self.assertTrue(authorize(ALICE, Action.read, Resource.requisition, owner_id=ALICE.id))
        d = authorize(BOB, Action.read, Resource.requisition, owner_id=ALICE.id)
        self.assertEqual(d.reason, DenyReason.not_owner)

    def test_status_update_admin_only(self):
        self.assertTrue(authorize(ADMIN, Action.update, Resource.requisition, owner_id=ALICE.id))
        self.assertFalse(authorize(ALICE, Action.update, Resource.requisition, owner_id=ALICE.id))

    def test_owner_delete_requires_pending(self):
        ok = authorize(ALICE, Action.delete, Resource.requisition, owner_id=ALICE.id, state={"status": "pending"})
        self.assertTrue(ok)
        for status in ("approved", "rejected", "processing", "completed"):
            d = authorize(ALICE, Action.delete, Resource.requisition, owner_id=ALICE.id, state={"status": status})
            self.assertEqual(d.reason, DenyReason.invariant_violation)
            self.assertEqual(d.message, "Can only delete pending requisitions")

    def test_admin_delete_any_status(self):
        d = authorize(ADMIN, Action.delete, Resource.requisition, owner_id=ALICE.id, state={"status": "approved"})
        self.assertTrue(d.allowed)


class TaskPolicyTests(unittest.TestCase):
    def test_create_delete_admin_only(self):
        self.assertTrue(authorize(ADMIN, Action.create, Resource.task))
        self.assertFalse(authorize(ALICE, Action.create, Resource.task))
        self.assertFalse(authorize(ALICE, Action.delete, Resource.task, owner_id=ALICE.id))

    def test_assignee_reads_own(self):
        self.assertTrue(authorize(ALICE, Action.read, Resource.task, owner_id=ALICE.id))
        self.assertEqual(
            authorize(BOB, Action.read, Resource.task, owner_id=ALICE.id).reason,
            DenyReason.not_owner,
        )

    def test_assignee_update_limited_to_status(self):
        d = authorize(ALICE, Action.update, Resource.task, owner_id=ALICE.id)
        self.assertTrue(d.allowed)
        self.assertEqual(d.fields, frozenset({"status"}))

    def test_admin_update_unrestricted(self):
        d = authorize(ADMIN, Action.update, Resource.task, owner_id=ALICE.id)
        self.assertTrue(d.allowed)
        self.assertIsNone(d.fields)


class PersonalPolicyTests(unittest.TestCase):
    def test_notes_and_reminders_are_private(self):
        for resource in (Resource.note, Resource.reminder):
            self.assertTrue(authorize(ALICE, Action.update, resource, owner_id=ALICE.id))
            d = authorize(ADMIN, Action.read, resource, owner_id=ALICE.id)
            self.assertEqual(d.reason, DenyReason.not_owner)
            self.assertEqual(d.message, "Unauthorized")

    def test_missing_row_looks_like_foreign_row(self):
        d = authorize(ALICE, Action.delete, Resource.note, owner_id=None)
        self.assertEqual(d.message, "Unauthorized")


class ProfilePolicyTests(unittest.TestCase):
    def test_own_profile(self):
        self.assertTrue(authorize(ALICE, Action.read, Resource.profile, owner_id=ALICE.id))
        self.assertTrue(authorize(ALICE, Action.update, Resource.profile, owner_id=ALICE.id))
        self.assertFalse(authorize(BOB, Action.read, Resource.profile, owner_id=ALICE.id))

    def test_aggregate_admin_only(self):
        self.assertTrue(authorize(ADMIN, Action.list, Resource.profile))
        self.assertFalse(authorize(ALICE, Action.list, Resource.profile))

    def test_profiles_are_never_deleted_directly(self):
        self.assertFalse(authorize(ADMIN, Action.delete, Resource.profile, owner_id=ADMIN.id))


class AssignmentPolicyTests(unittest.TestCase):
    def test_admin_only(self):
        self.assertTrue(authorize(ADMIN, Action.update, Resource.assignment))
        self.assertFalse(authorize(ALICE, Action.list, Resource.assignment))
