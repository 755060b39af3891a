"""
Tests for the announcement feed: likes, comments and deletion.
"""
import json

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from apps.identity.models import UserRole
from apps.moderation.models import AuditLog
from .models import Announcement, AnnouncementLike, Comment


User = get_user_model()


class AnnouncementAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.author = User.objects.create_user(username="author", password="pw")
        self.student = User.objects.create_user(username="student", password="pw")
        self.announcement = Announcement.objects.create(
            author=self.author,
            title="Hackathon",
            content="48h hackathon at the university this weekend",
            announcement_type="project",
        )

    def _post(self, url, body=None):
        return self.client.post(url, data=json.dumps(body or {}), content_type="application/json")

    def test_list_exposes_type(self):
        response = self.client.get("/api/announcements/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()[0]["type"], "project")

    def test_list_filter_by_type(self):
        response = self.client.get("/api/announcements/", {"type": "job"})
        self.assertEqual(response.json(), [])

    def test_create_ignores_counters(self):
        self.client.force_login(self.student)
        response = self._post("/api/announcements/", {"content": "Looking for a study group", "likes": 99})
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["likes"], 0)
        self.assertEqual(data["type"], "general")
        self.assertEqual(data["author_id"], str(self.student.id))

    def test_create_rejects_unknown_type(self):
        self.client.force_login(self.student)
        response = self._post("/api/announcements/", {"content": "Hi", "type": "event"})
        self.assertEqual(response.status_code, 400)

    def test_create_rejects_overlong_title(self):
        self.client.force_login(self.student)
        response = self._post("/api/announcements/", {"title": "x" * 300, "content": "Hi"})
        self.assertEqual(response.status_code, 422)
        self.assertFalse(Announcement.objects.filter(author=self.student).exists())

    def test_get_missing_announcement(self):
        response = self.client.get("/api/announcements/00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)


class LikeTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.author = User.objects.create_user(username="author", password="pw")
        self.student = User.objects.create_user(username="student", password="pw")
        self.announcement = Announcement.objects.create(author=self.author, content="Exam results are out")
        self.url = f"/api/announcements/{self.announcement.id}/like"

    def test_like_is_idempotent(self):
        self.client.force_login(self.student)
        self.client.post(self.url)
        response = self.client.post(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["likes"], 1)
        self.assertEqual(AnnouncementLike.objects.count(), 1)

    def test_unlike_decrements(self):
        self.client.force_login(self.student)
        self.client.post(self.url)
        response = self.client.delete(self.url)
        self.assertEqual(response.json()["likes"], 0)
        self.announcement.refresh_from_db()
        self.assertEqual(self.announcement.likes, 0)

    def test_unlike_without_like_never_negative(self):
        self.client.force_login(self.student)
        response = self.client.delete(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["likes"], 0)

    def test_like_requires_auth(self):
        response = self.client.post(self.url)
        self.assertEqual(response.status_code, 401)

    def test_like_missing_announcement(self):
        self.client.force_login(self.student)
        response = self.client.post("/api/announcements/00000000-0000-0000-0000-000000000000/like")
        self.assertEqual(response.status_code, 404)


class CommentTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.author = User.objects.create_user(username="author", password="pw")
        self.student = User.objects.create_user(username="student", password="pw")
        self.admin = User.objects.create_user(username="admin", password="pw", role=UserRole.ADMIN)
        self.announcement = Announcement.objects.create(author=self.author, content="Library closes early")

    def _comment(self, content):
        return self.client.post(
            f"/api/announcements/{self.announcement.id}/comments",
            data=json.dumps({"content": content}),
            content_type="application/json",
        )

    def test_comment_increments_counter(self):
        self.client.force_login(self.student)
        response = self._comment("Thanks for the heads up")
        self.assertEqual(response.status_code, 200)
        self.announcement.refresh_from_db()
        self.assertEqual(self.announcement.comments_count, 1)

        response = self.client.get(f"/api/announcements/{self.announcement.id}/comments")
        self.assertEqual(len(response.json()), 1)

    def test_empty_comment_rejected(self):
        self.client.force_login(self.student)
        response = self._comment("   ")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(Comment.objects.count(), 0)

    def test_stranger_cannot_delete(self):
        self.client.force_login(self.student)
        response = self.client.delete(f"/api/announcements/{self.announcement.id}")
        self.assertEqual(response.status_code, 403)

    def test_author_delete_removes_children(self):
        AnnouncementLike.objects.create(announcement=self.announcement, user=self.student)
        Comment.objects.create(announcement=self.announcement, user=self.student, content="ok")

        self.client.force_login(self.author)
        response = self.client.delete(f"/api/announcements/{self.announcement.id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(AnnouncementLike.objects.count(), 0)
        self.assertEqual(Comment.objects.count(), 0)
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_admin_delete_is_audited(self):
        self.client.force_login(self.admin)
        response = self.client.delete(f"/api/announcements/{self.announcement.id}")
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Announcement.objects.exists())
        self.assertTrue(AuditLog.objects.filter(action="DELETE_ANNOUNCEMENT").exists())
