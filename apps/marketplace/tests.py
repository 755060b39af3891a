"""
Tests for the service marketplace.
"""
import json

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.identity.models import UserRole
from apps.moderation.models import AuditLog
from .models import Service, ServiceRequest, ServiceStatus, ServiceRequestStatus


User = get_user_model()


def make_service(provider, **overrides):
    data = {
        "title": "Math tutoring",
        "description": "Calculus and linear algebra",
        "category": "Tutoring",
        "price": "5000 FCFA/h",
        "status": ServiceStatus.ACTIVE,
    }
    data.update(overrides)
    return Service.objects.create(provider=provider, **data)


class ServiceAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.provider = User.objects.create_user(username="provider", password="pw")
        self.student = User.objects.create_user(username="student", password="pw")
        self.admin = User.objects.create_user(username="admin", password="pw", role=UserRole.ADMIN)
        self.active = make_service(self.provider)
        self.pending = make_service(
            self.provider, title="Logo design", category="Design", status=ServiceStatus.PENDING_APPROVAL
        )

    def _post(self, url, body=None):
        return self.client.post(url, data=json.dumps(body or {}), content_type="application/json")

    def test_public_list_only_active(self):
        response = self.client.get("/api/services/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["title"] for s in response.json()], ["Math tutoring"])

    def test_provider_list_includes_all_statuses(self):
        response = self.client.get("/api/services/", {"provider": str(self.provider.id)})
        self.assertEqual(len(response.json()), 2)

    def test_create_always_pending(self):
        self.client.force_login(self.student)
        response = self._post("/api/services/", {
            "title": "Phone repair",
            "description": "Screens and batteries",
            "category": "Repair",
            "status": "active",
        })
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], ServiceStatus.PENDING_APPROVAL)
        self.assertEqual(data["provider_id"], str(self.student.id))

    def test_create_requires_auth(self):
        response = self._post("/api/services/", {"title": "X", "description": "Y", "category": "Z"})
        self.assertEqual(response.status_code, 401)

    def test_create_rejects_overlong_title(self):
        self.client.force_login(self.student)
        response = self._post("/api/services/", {"title": "x" * 300, "description": "Y", "category": "Z"})
        self.assertEqual(response.status_code, 422)
        self.assertFalse(Service.objects.filter(provider=self.student).exists())

    def test_search_ignores_pending(self):
        response = self.client.get("/api/services/search", {"q": "design"})
        self.assertEqual(response.json(), [])

        response = self.client.get("/api/services/search", {"q": "TUTORING"})
        self.assertEqual(len(response.json()), 1)

    def test_get_missing_service(self):
        response = self.client.get("/api/services/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)

    def test_approve_requires_moderator(self):
        self.client.force_login(self.student)
        response = self._post(f"/api/services/{self.pending.id}/approve")
        self.assertEqual(response.status_code, 403)

    def test_admin_approves_service(self):
        self.client.force_login(self.admin)
        response = self._post(f"/api/services/{self.pending.id}/approve")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], ServiceStatus.ACTIVE)
        self.assertTrue(AuditLog.objects.filter(action="APPROVE_SERVICE", target_id=self.pending.id).exists())

    def test_assistant_admin_approves_service(self):
        assistant = User.objects.create_user(username="assistant", password="pw", role=UserRole.ASSISTANT_ADMIN)
        self.client.force_login(assistant)
        response = self._post(f"/api/services/{self.pending.id}/approve")
        self.assertEqual(response.status_code, 200)


class ServiceRequestTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.provider = User.objects.create_user(username="provider", password="pw")
        self.student = User.objects.create_user(username="student", password="pw")
        self.service = make_service(self.provider)

    def _post(self, url, body=None):
        return self.client.post(url, data=json.dumps(body or {}), content_type="application/json")

    def test_request_active_service(self):
        self.client.force_login(self.student)
        response = self._post(f"/api/services/{self.service.id}/request", {"message": "Tuesday evening?"})
        self.assertEqual(response.status_code, 200)
        service_request = ServiceRequest.objects.get(id=response.json()["request_id"])
        self.assertEqual(service_request.status, ServiceRequestStatus.PENDING)
        self.assertEqual(service_request.message, "Tuesday evening?")

    def test_request_without_body(self):
        self.client.force_login(self.student)
        response = self.client.generic("POST", f"/api/services/{self.service.id}/request")
        self.assertEqual(response.status_code, 200)
        service_request = ServiceRequest.objects.get(id=response.json()["request_id"])
        self.assertIsNone(service_request.message)

    def test_request_pending_service_rejected(self):
        self.service.status = ServiceStatus.PENDING_APPROVAL
        self.service.save()
        self.client.force_login(self.student)
        response = self._post(f"/api/services/{self.service.id}/request")
        self.assertEqual(response.status_code, 400)

    def test_request_own_service_rejected(self):
        self.client.force_login(self.provider)
        response = self._post(f"/api/services/{self.service.id}/request")
        self.assertEqual(response.status_code, 400)

    def test_my_requests(self):
        ServiceRequest.objects.create(service=self.service, requester=self.student)
        self.client.force_login(self.student)
        response = self.client.get("/api/services/requests")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)

    def test_provider_completes_approved_request(self):
        service_request = ServiceRequest.objects.create(
            service=self.service, requester=self.student, status=ServiceRequestStatus.APPROVED
        )
        self.client.force_login(self.provider)
        response = self._post(f"/api/services/requests/{service_request.id}/complete")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], ServiceRequestStatus.COMPLETED)
        self.assertIsNotNone(response.json()["completed_at"])

    def test_complete_pending_request_rejected(self):
        service_request = ServiceRequest.objects.create(service=self.service, requester=self.student)
        self.client.force_login(self.provider)
        response = self._post(f"/api/services/requests/{service_request.id}/complete")
        self.assertEqual(response.status_code, 400)

    def test_only_provider_completes(self):
        service_request = ServiceRequest.objects.create(
            service=self.service, requester=self.student, status=ServiceRequestStatus.APPROVED
        )
        self.client.force_login(self.student)
        response = self._post(f"/api/services/requests/{service_request.id}/complete")
        self.assertEqual(response.status_code, 403)
