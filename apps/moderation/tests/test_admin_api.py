"""
Tests for the admin panel endpoints.
"""
import json

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.identity.models import UserRole
from apps.marketplace.models import Service, ServiceRequest, ServiceStatus, ServiceRequestStatus
from apps.moderation.models import AuditLog
from apps.network.models import Connection, ConnectionStatus
from apps.projects.models import Project, ProjectStatus


User = get_user_model()


class ServiceModerationTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.admin = User.objects.create_user(username="admin", password="pw", role=UserRole.ADMIN)
        self.student = User.objects.create_user(username="student", password="pw")
        self.provider = User.objects.create_user(username="provider", password="pw")
        self.pending = Service.objects.create(
            provider=self.provider, title="Logo design", description="Vector logos", category="Design",
        )
        self.active = Service.objects.create(
            provider=self.provider, title="Tutoring", description="Maths", category="Tutoring",
            status=ServiceStatus.ACTIVE,
        )

    def test_pending_services(self):
        self.client.force_login(self.admin)
        response = self.client.get("/api/admin/pending-services")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["title"] for s in response.json()], ["Logo design"])

    def test_student_forbidden(self):
        self.client.force_login(self.student)
        self.assertEqual(self.client.get("/api/admin/pending-services").status_code, 403)
        self.assertEqual(self.client.get("/api/admin/stats").status_code, 403)

    def test_reject_service_marks_inactive(self):
        self.client.force_login(self.admin)
        response = self.client.delete(f"/api/admin/services/{self.pending.id}")
        self.assertEqual(response.status_code, 200)
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.status, ServiceStatus.INACTIVE)
        self.assertTrue(AuditLog.objects.filter(action="REJECT_SERVICE").exists())

    def test_reject_missing_service(self):
        self.client.force_login(self.admin)
        response = self.client.delete("/api/admin/services/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)

    def test_approve_request(self):
        service_request = ServiceRequest.objects.create(service=self.active, requester=self.student)
        self.client.force_login(self.admin)

        response = self.client.get("/api/admin/service-requests")
        self.assertEqual(len(response.json()), 1)

        response = self.client.post(f"/api/admin/service-requests/{service_request.id}/approve")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], ServiceRequestStatus.APPROVED)
        self.assertIsNotNone(response.json()["approved_at"])

        response = self.client.post(f"/api/admin/service-requests/{service_request.id}/reject")
        self.assertEqual(response.status_code, 400)

    def test_reject_request(self):
        service_request = ServiceRequest.objects.create(service=self.active, requester=self.student)
        assistant = User.objects.create_user(username="assistant", password="pw", role=UserRole.ASSISTANT_ADMIN)
        self.client.force_login(assistant)
        response = self.client.post(f"/api/admin/service-requests/{service_request.id}/reject")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], ServiceRequestStatus.REJECTED)


class UserManagementTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.admin = User.objects.create_user(username="admin", password="pw", role=UserRole.ADMIN)
        self.assistant = User.objects.create_user(username="assistant", password="pw", role=UserRole.ASSISTANT_ADMIN)
        self.student = User.objects.create_user(username="student", password="pw")

    def _put(self, user_id, body):
        return self.client.put(
            f"/api/admin/users/{user_id}",
            data=json.dumps(body),
            content_type="application/json",
        )

    def test_assistant_lists_users(self):
        self.client.force_login(self.assistant)
        response = self.client.get("/api/admin/users")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 3)

    def test_admin_changes_role(self):
        self.client.force_login(self.admin)
        response = self._put(self.student.id, {"role": "mentor"})
        self.assertEqual(response.status_code, 200)
        self.student.refresh_from_db()
        self.assertEqual(self.student.role, UserRole.MENTOR)
        self.assertTrue(AuditLog.objects.filter(action="UPDATE_USER", target_id=self.student.id).exists())

    def test_admin_deactivates_user(self):
        self.client.force_login(self.admin)
        response = self._put(self.student.id, {"is_active": False})
        self.assertEqual(response.status_code, 200)
        self.student.refresh_from_db()
        self.assertFalse(self.student.is_active)

    def test_unknown_role_rejected(self):
        self.client.force_login(self.admin)
        response = self._put(self.student.id, {"role": "superuser"})
        self.assertEqual(response.status_code, 400)

    def test_assistant_cannot_update(self):
        self.client.force_login(self.assistant)
        response = self._put(self.student.id, {"role": "admin"})
        self.assertEqual(response.status_code, 403)


class StatsTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.admin = User.objects.create_user(username="admin", password="pw", role=UserRole.ADMIN)
        self.student = User.objects.create_user(username="student", password="pw", is_active=False)

    def test_stats(self):
        Project.objects.create(creator=self.admin, title="A", description="a", category="c")
        Project.objects.create(
            creator=self.admin, title="B", description="b", category="c", status=ProjectStatus.COMPLETED
        )
        Service.objects.create(provider=self.admin, title="S", description="s", category="c")
        Connection.objects.create(requester=self.admin, receiver=self.student, status=ConnectionStatus.ACCEPTED)
        Connection.objects.create(requester=self.student, receiver=self.admin)

        self.client.force_login(self.admin)
        response = self.client.get("/api/admin/stats")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            "total_users": 2,
            "active_users": 1,
            "total_projects": 2,
            "active_projects": 1,
            "total_services": 1,
            "pending_services": 1,
            "total_messages": 0,
            "total_connections": 1,
            "total_announcements": 0,
        })
