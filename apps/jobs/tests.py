"""
Tests for job offers and applications.
"""
import json

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.identity.models import UserRole
from .models import JobOffer, JobApplication, JobStatus, ApplicationStatus


User = get_user_model()


class JobAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.company = User.objects.create_user(username="tchaddigital", password="pw", role=UserRole.COMPANY)
        self.student = User.objects.create_user(username="student", password="pw")
        self.job = JobOffer.objects.create(
            poster=self.company,
            title="Backend intern",
            description="Django APIs",
            company="Tchad Digital",
            location="N'Djamena",
            job_type="internship",
            requirements=["python"],
        )

    def _post(self, url, body=None):
        return self.client.post(url, data=json.dumps(body or {}), content_type="application/json")

    def test_list_exposes_type(self):
        response = self.client.get("/api/jobs/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["type"], "internship")

    def test_list_filter_by_type(self):
        response = self.client.get("/api/jobs/", {"type": "full_time"})
        self.assertEqual(response.json(), [])

    def test_create_job(self):
        self.client.force_login(self.company)
        response = self._post("/api/jobs/", {
            "title": "Data analyst",
            "description": "Dashboards",
            "company": "Tchad Digital",
            "location": "Remote",
            "type": "part_time",
            "benefits": ["remote", ""],
        })
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["poster_id"], str(self.company.id))
        self.assertEqual(data["benefits"], ["remote"])

    def test_create_job_invalid_type(self):
        self.client.force_login(self.company)
        response = self._post("/api/jobs/", {
            "title": "X", "description": "Y", "company": "Z", "location": "L", "type": "volunteer",
        })
        self.assertEqual(response.status_code, 400)

    def test_create_job_overlong_title(self):
        self.client.force_login(self.company)
        response = self._post("/api/jobs/", {
            "title": "x" * 300, "description": "Y", "company": "Z", "location": "L", "type": "internship",
        })
        self.assertEqual(response.status_code, 422)
        self.assertEqual(JobOffer.objects.count(), 1)

    def test_apply_without_body(self):
        self.client.force_login(self.student)
        response = self.client.generic("POST", f"/api/jobs/{self.job.id}/apply")
        self.assertEqual(response.status_code, 200)
        application = JobApplication.objects.get(job=self.job, user=self.student)
        self.assertIsNone(application.cover_letter)

    def test_apply_and_list_my_applications(self):
        self.client.force_login(self.student)
        response = self._post(f"/api/jobs/{self.job.id}/apply", {"cover_letter": "I love Django"})
        self.assertEqual(response.status_code, 200)

        response = self.client.get("/api/jobs/applications")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)
        self.assertEqual(response.json()[0]["cover_letter"], "I love Django")

    def test_apply_twice_rejected(self):
        self.client.force_login(self.student)
        self._post(f"/api/jobs/{self.job.id}/apply")
        response = self._post(f"/api/jobs/{self.job.id}/apply")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(JobApplication.objects.count(), 1)

    def test_apply_to_closed_job_rejected(self):
        self.job.status = JobStatus.CLOSED
        self.job.save()
        self.client.force_login(self.student)
        response = self._post(f"/api/jobs/{self.job.id}/apply")
        self.assertEqual(response.status_code, 400)

    def test_poster_cannot_apply(self):
        self.client.force_login(self.company)
        response = self._post(f"/api/jobs/{self.job.id}/apply")
        self.assertEqual(response.status_code, 400)

    def test_apply_requires_auth(self):
        response = self._post(f"/api/jobs/{self.job.id}/apply")
        self.assertEqual(response.status_code, 401)

    def test_poster_sees_applications(self):
        JobApplication.objects.create(job=self.job, user=self.student)

        self.client.force_login(self.student)
        response = self.client.get(f"/api/jobs/{self.job.id}/applications")
        self.assertEqual(response.status_code, 403)

        self.client.force_login(self.company)
        response = self.client.get(f"/api/jobs/{self.job.id}/applications")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)

    def test_close_job(self):
        self.client.force_login(self.company)
        response = self._post(f"/api/jobs/{self.job.id}/close")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], JobStatus.CLOSED)

    def test_withdraw_application(self):
        application = JobApplication.objects.create(job=self.job, user=self.student)
        self.client.force_login(self.student)
        response = self._post(f"/api/jobs/applications/{application.id}/withdraw")
        self.assertEqual(response.status_code, 200)
        application.refresh_from_db()
        self.assertEqual(application.status, ApplicationStatus.WITHDRAWN)

        response = self._post(f"/api/jobs/applications/{application.id}/withdraw")
        self.assertEqual(response.status_code, 400)

    def test_get_missing_job(self):
        response = self.client.get("/api/jobs/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)
