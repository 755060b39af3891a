"""
Tests for project listing, search and the join workflow.
"""
import json

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from .models import Project, ProjectParticipant, ProjectStatus, ParticipantStatus


User = get_user_model()


def make_project(creator, **overrides):
    data = {
        "title": "Solar irrigation prototype",
        "description": "Low-cost irrigation controller for market gardens",
        "category": "Engineering",
    }
    data.update(overrides)
    return Project.objects.create(creator=creator, **data)


class ProjectAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.creator = User.objects.create_user(username="creator", password="pw", email="c@test.com")
        self.student = User.objects.create_user(username="student", password="pw", email="s@test.com")
        self.project = make_project(self.creator)

    def test_list_is_public(self):
        response = self.client.get("/api/projects/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)

    def test_list_filtered_by_creator(self):
        make_project(self.student, title="Other")
        response = self.client.get("/api/projects/", {"creator": str(self.student.id)})
        self.assertEqual([p["title"] for p in response.json()], ["Other"])

    def test_create_requires_auth(self):
        response = self.client.post(
            "/api/projects/",
            data=json.dumps({"title": "X", "description": "Y", "category": "Z"}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 401)

    def test_create_sets_creator(self):
        self.client.force_login(self.student)
        response = self.client.post(
            "/api/projects/",
            data=json.dumps({
                "title": "Mobile health app",
                "description": "Vaccination reminders",
                "category": "Health",
                "skills": ["react native", " "],
                "max_participants": 4,
            }),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["creator_id"], str(self.student.id))
        self.assertEqual(data["current_participants"], 0)
        self.assertEqual(data["skills"], ["react native"])

    def test_create_rejects_unknown_status(self):
        self.client.force_login(self.student)
        response = self.client.post(
            "/api/projects/",
            data=json.dumps({"title": "X", "description": "Y", "category": "Z", "status": "archived"}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 400)

    def test_create_rejects_overlong_title(self):
        self.client.force_login(self.student)
        response = self.client.post(
            "/api/projects/",
            data=json.dumps({"title": "x" * 300, "description": "Y", "category": "Z"}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 422)
        self.assertFalse(Project.objects.filter(creator=self.student).exists())

    def test_get_missing_project(self):
        response = self.client.get("/api/projects/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)

    def test_search(self):
        make_project(self.creator, title="Chess club", description="Weekly games", category="Leisure")
        response = self.client.get("/api/projects/search", {"q": "IRRIGATION"})
        self.assertEqual([p["title"] for p in response.json()], ["Solar irrigation prototype"])

        response = self.client.get("/api/projects/search", {"q": "leisure"})
        self.assertEqual([p["title"] for p in response.json()], ["Chess club"])

    def test_search_empty_query(self):
        response = self.client.get("/api/projects/search")
        self.assertEqual(response.json(), [])


class JoinProjectTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.creator = User.objects.create_user(username="creator", password="pw")
        self.student = User.objects.create_user(username="student", password="pw")
        self.project = make_project(self.creator, max_participants=1)

    def _join(self, user, project=None):
        self.client.force_login(user)
        project = project or self.project
        return self.client.post(f"/api/projects/{project.id}/join")

    def test_join_increments_counter(self):
        response = self._join(self.student)
        self.assertEqual(response.status_code, 200)
        self.project.refresh_from_db()
        self.assertEqual(self.project.current_participants, 1)
        self.assertTrue(ProjectParticipant.objects.filter(project=self.project, user=self.student).exists())

    def test_join_twice_rejected(self):
        self._join(self.student)
        self.project.max_participants = 5
        self.project.save()
        response = self._join(self.student)
        self.assertEqual(response.status_code, 400)
        self.project.refresh_from_db()
        self.assertEqual(self.project.current_participants, 1)

    def test_join_full_project_rejected(self):
        self._join(self.student)
        other = User.objects.create_user(username="other", password="pw")
        response = self._join(other)
        self.assertEqual(response.status_code, 400)

    def test_creator_cannot_join(self):
        response = self._join(self.creator)
        self.assertEqual(response.status_code, 400)

    def test_cannot_join_completed_project(self):
        self.project.status = ProjectStatus.COMPLETED
        self.project.save()
        response = self._join(self.student)
        self.assertEqual(response.status_code, 400)

    def test_join_missing_project(self):
        self.client.force_login(self.student)
        response = self.client.post("/api/projects/00000000-0000-0000-0000-000000000000/join")
        self.assertEqual(response.status_code, 404)

    def test_participants_listing(self):
        self._join(self.student)
        response = self.client.get(f"/api/projects/{self.project.id}/participants")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["user_id"], str(self.student.id))
        self.assertEqual(response.json()[0]["status"], ParticipantStatus.PENDING)

    def test_creator_rejects_participant_frees_seat(self):
        self._join(self.student)
        participant = ProjectParticipant.objects.get(project=self.project, user=self.student)

        self.client.force_login(self.creator)
        response = self.client.patch(
            f"/api/projects/{self.project.id}/participants/{participant.id}",
            data=json.dumps({"status": "rejected"}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 200)
        self.project.refresh_from_db()
        self.assertEqual(self.project.current_participants, 0)

    def test_only_creator_decides(self):
        self._join(self.student)
        participant = ProjectParticipant.objects.get(project=self.project, user=self.student)

        self.client.force_login(self.student)
        response = self.client.patch(
            f"/api/projects/{self.project.id}/participants/{participant.id}",
            data=json.dumps({"status": "accepted"}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 403)
