import json

from django.test import TestCase, Client
from .models import User, UserRole
from .permissions import get_user_permissions, Permissions
from .jwt_auth import create_refresh_token


class RBACTest(TestCase):
    def test_student_has_no_moderation_permissions(self):
        user = User.objects.create_user(username="student", password="pw", role=UserRole.STUDENT)
        self.assertEqual(get_user_permissions(user), [])

    def test_assistant_admin_permissions(self):
        user = User.objects.create_user(username="assistant", password="pw", role=UserRole.ASSISTANT_ADMIN)
        perms = get_user_permissions(user)
        self.assertIn(Permissions.MARKETPLACE_APPROVE_SERVICE, perms)
        self.assertNotIn(Permissions.IDENTITY_MANAGE_USER, perms)

    def test_admin_permissions(self):
        user = User.objects.create_user(username="admin", password="pw", role=UserRole.ADMIN)
        perms = get_user_permissions(user)
        self.assertIn(Permissions.IDENTITY_MANAGE_USER, perms)
        self.assertIn(Permissions.MARKETPLACE_APPROVE_SERVICE, perms)

    def test_inactive_user_has_no_permissions(self):
        user = User.objects.create_user(username="gone", password="pw", role=UserRole.ADMIN, is_active=False)
        self.assertEqual(get_user_permissions(user), [])


class AuthAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(
            username="fatime",
            email="fatime@test.com",
            password="testpass123",
            first_name="Fatime",
            last_name="Abakar",
            university="University of N'Djamena",
            field="Computer Science",
        )

    def _login(self, **body):
        return self.client.post(
            "/api/auth/login",
            data=json.dumps(body),
            content_type="application/json",
        )

    def test_login_with_username_sets_cookies(self):
        response = self._login(username="fatime", password="testpass123")
        self.assertEqual(response.status_code, 200)
        self.assertIn("access_token", response.cookies)
        self.assertIn("refresh_token", response.cookies)
        self.assertEqual(response.json()["user"]["username"], "fatime")

    def test_login_with_email(self):
        response = self._login(email="fatime@test.com", password="testpass123")
        self.assertEqual(response.status_code, 200)

    def test_login_wrong_password(self):
        response = self._login(username="fatime", password="nope")
        self.assertEqual(response.status_code, 401)

    def test_login_disabled_account(self):
        self.user.is_active = False
        self.user.save()
        response = self._login(username="fatime", password="testpass123")
        self.assertEqual(response.status_code, 401)

    def test_current_user_requires_auth(self):
        response = self.client.get("/api/auth/user")
        self.assertEqual(response.status_code, 401)

    def test_current_user_via_jwt_cookie(self):
        self._login(username="fatime", password="testpass123")
        response = self.client.get("/api/auth/user")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], str(self.user.id))
        self.assertEqual(response.json()["permissions"], [])

    def test_refresh_token_cannot_be_used_as_access_token(self):
        self.client.cookies["access_token"] = create_refresh_token(self.user.id)
        response = self.client.get("/api/auth/user")
        self.assertEqual(response.status_code, 401)

    def test_refresh_issues_new_access_token(self):
        self._login(username="fatime", password="testpass123")
        response = self.client.post("/api/auth/refresh")
        self.assertEqual(response.status_code, 200)
        self.assertIn("access_token", response.cookies)

    def test_refresh_without_cookie(self):
        response = self.client.post("/api/auth/refresh")
        self.assertEqual(response.status_code, 401)

    def test_logout_clears_cookies(self):
        self._login(username="fatime", password="testpass123")
        response = self.client.post("/api/auth/logout")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.cookies["access_token"].value, "")


class ProfileAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(
            username="moussa",
            email="moussa@test.com",
            password="testpass123",
            first_name="Moussa",
            last_name="Deby",
            field="Mechanical Engineering",
        )
        User.objects.create_user(
            username="zara", password="pw", first_name="Zara", university="INSTA Abeche",
        )

    def test_update_profile(self):
        self.client.force_login(self.user)
        response = self.client.put(
            "/api/users/profile",
            data=json.dumps({"bio": "Hello", "skills": ["python", " django ", ""], "year_of_study": 2}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 200)
        self.user.refresh_from_db()
        self.assertEqual(self.user.bio, "Hello")
        self.assertEqual(self.user.skills, ["python", "django"])
        self.assertEqual(self.user.year_of_study, 2)

    def test_profile_update_cannot_change_role(self):
        self.client.force_login(self.user)
        self.client.put(
            "/api/users/profile",
            data=json.dumps({"role": "admin", "connections": 99}),
            content_type="application/json",
        )
        self.user.refresh_from_db()
        self.assertEqual(self.user.role, UserRole.STUDENT)
        self.assertEqual(self.user.connections, 0)

    def test_profile_update_rejects_bad_year(self):
        self.client.force_login(self.user)
        response = self.client.put(
            "/api/users/profile",
            data=json.dumps({"year_of_study": 42}),
            content_type="application/json",
        )
        self.assertEqual(response.status_code, 400)

    def test_profile_update_requires_auth(self):
        response = self.client.put(
            "/api/users/profile", data=json.dumps({"bio": "x"}), content_type="application/json",
        )
        self.assertEqual(response.status_code, 401)

    def test_search_by_field_and_university(self):
        response = self.client.get("/api/users/search", {"q": "mechanical"})
        self.assertEqual([u["username"] for u in response.json()], ["moussa"])

        response = self.client.get("/api/users/search", {"q": "abeche"})
        self.assertEqual([u["username"] for u in response.json()], ["zara"])

    def test_search_empty_query(self):
        response = self.client.get("/api/users/search")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_public_profile_hides_email(self):
        response = self.client.get(f"/api/users/{self.user.id}")
        self.assertEqual(response.status_code, 200)
        self.assertNotIn("email", response.json())
