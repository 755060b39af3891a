"""
Tests for the audit trail.

Covers:
1. audit_service.log_action(): creates an AuditLog with correct fields
2. GET /api/admin/audit-logs: list endpoint with filters and permission checks
"""
from uuid import uuid4

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.identity.models import UserRole
from apps.moderation.models import AuditLog
from apps.moderation.audit_service import log_action, AuditAction


User = get_user_model()


def make_user(role=UserRole.STUDENT, username=None):
    username = username or f"user_{uuid4().hex[:8]}"
    return User.objects.create_user(
        username=username,
        email=f"{username}@test.com",
        password="testpass123",
        role=role,
    )


class AuditServiceTest(TestCase):
    """Test the log_action() helper directly."""

    def setUp(self):
        self.user = make_user(UserRole.ADMIN)
        self.target_id = uuid4()

    def test_log_action_creates_audit_log(self):
        log = log_action(
            action=AuditAction.APPROVE_SERVICE,
            target_type="Service",
            target_id=self.target_id,
            target_label="Math tutoring",
            performed_by=self.user,
            context={"previous_status": "pending_approval"},
        )
        self.assertIsNotNone(log)
        self.assertEqual(log.action, AuditAction.APPROVE_SERVICE)
        self.assertEqual(log.target_id, self.target_id)
        self.assertEqual(log.performed_by, self.user)
        self.assertEqual(log.context["previous_status"], "pending_approval")

    def test_log_action_without_user(self):
        log = log_action(
            action=AuditAction.REJECT_SERVICE,
            target_type="Service",
            target_id=self.target_id,
            performed_by=None,
        )
        self.assertIsNotNone(log)
        self.assertEqual(log.context, {})

    def test_log_action_never_raises(self):
        result = log_action(
            action=AuditAction.UPDATE_USER,
            target_type="User",
            target_id="not-a-uuid",
            performed_by=self.user,
        )
        self.assertIsNone(result)


class AuditLogAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.admin = make_user(UserRole.ADMIN, username="audit_admin")
        self.student = make_user(username="audit_student")
        self.target_id = uuid4()

        AuditLog.objects.create(
            action=AuditAction.APPROVE_SERVICE,
            target_type="Service",
            target_id=self.target_id,
            performed_by=self.admin,
        )
        AuditLog.objects.create(
            action=AuditAction.UPDATE_USER,
            target_type="User",
            target_id=self.target_id,
            performed_by=self.admin,
        )

    def test_requires_auth(self):
        response = self.client.get("/api/admin/audit-logs")
        self.assertEqual(response.status_code, 401)

    def test_student_forbidden(self):
        self.client.force_login(self.student)
        response = self.client.get("/api/admin/audit-logs")
        self.assertEqual(response.status_code, 403)

    def test_admin_lists_logs(self):
        self.client.force_login(self.admin)
        response = self.client.get("/api/admin/audit-logs")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(len(data), 2)
        self.assertEqual(data[0]["performed_by_name"], "audit_admin")

    def test_filter_by_action(self):
        self.client.force_login(self.admin)
        response = self.client.get("/api/admin/audit-logs", {"action": AuditAction.UPDATE_USER})
        self.assertEqual([d["target_type"] for d in response.json()], ["User"])

    def test_filter_by_target_type_and_limit(self):
        self.client.force_login(self.admin)
        response = self.client.get("/api/admin/audit-logs", {"target_type": "Service"})
        self.assertEqual(len(response.json()), 1)

        response = self.client.get("/api/admin/audit-logs", {"limit": 1})
        self.assertEqual(len(response.json()), 1)
