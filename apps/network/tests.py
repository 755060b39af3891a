"""
Tests for connection requests.
"""
import json
from unittest import mock

from django.test import TestCase, Client
from django.contrib.auth import get_user_model

from .models import Connection, ConnectionStatus


User = get_user_model()


class ConnectionAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.bob = User.objects.create_user(username="bob", password="pw")

    def _request(self, receiver_id):
        return self.client.post(
            "/api/connections/",
            data=json.dumps({"receiver_id": str(receiver_id)}),
            content_type="application/json",
        )

    def test_request_connection(self):
        self.client.force_login(self.alice)
        response = self._request(self.bob.id)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], ConnectionStatus.PENDING)

    def test_self_connection_rejected(self):
        self.client.force_login(self.alice)
        response = self._request(self.alice.id)
        self.assertEqual(response.status_code, 400)

    def test_unknown_receiver(self):
        self.client.force_login(self.alice)
        response = self._request("00000000-0000-0000-0000-000000000000")
        self.assertEqual(response.status_code, 404)

    def test_duplicate_in_either_direction_rejected(self):
        Connection.objects.create(requester=self.bob, receiver=self.alice)
        self.client.force_login(self.alice)
        response = self._request(self.bob.id)
        self.assertEqual(response.status_code, 400)

    def test_request_locks_both_users(self):
        Connection.objects.create(requester=self.bob, receiver=self.alice, status=ConnectionStatus.ACCEPTED)
        self.client.force_login(self.alice)
        with mock.patch.object(User.objects, "select_for_update", wraps=User.objects.select_for_update) as lock:
            response = self._request(self.bob.id)
        self.assertEqual(response.status_code, 400)
        lock.assert_called_once_with()
        self.assertEqual(Connection.objects.count(), 1)

    def test_can_retry_after_rejection(self):
        Connection.objects.create(requester=self.alice, receiver=self.bob, status=ConnectionStatus.REJECTED)
        self.client.force_login(self.alice)
        response = self._request(self.bob.id)
        self.assertEqual(response.status_code, 200)

    def test_pending_lists_incoming_only(self):
        Connection.objects.create(requester=self.alice, receiver=self.bob)
        self.client.force_login(self.alice)
        self.assertEqual(self.client.get("/api/connections/pending").json(), [])

        self.client.force_login(self.bob)
        self.assertEqual(len(self.client.get("/api/connections/pending").json()), 1)

    def test_accept_increments_both_counters(self):
        connection = Connection.objects.create(requester=self.alice, receiver=self.bob)
        self.client.force_login(self.bob)
        response = self.client.post(f"/api/connections/{connection.id}/accept")
        self.assertEqual(response.status_code, 200)
        self.assertIsNotNone(response.json()["accepted_at"])

        self.alice.refresh_from_db()
        self.bob.refresh_from_db()
        self.assertEqual(self.alice.connections, 1)
        self.assertEqual(self.bob.connections, 1)

        response = self.client.get("/api/connections/")
        self.assertEqual(len(response.json()), 1)

    def test_only_receiver_accepts(self):
        connection = Connection.objects.create(requester=self.alice, receiver=self.bob)
        self.client.force_login(self.alice)
        response = self.client.post(f"/api/connections/{connection.id}/accept")
        self.assertEqual(response.status_code, 403)

    def test_accept_twice_rejected(self):
        connection = Connection.objects.create(requester=self.alice, receiver=self.bob)
        self.client.force_login(self.bob)
        self.client.post(f"/api/connections/{connection.id}/accept")
        response = self.client.post(f"/api/connections/{connection.id}/accept")
        self.assertEqual(response.status_code, 400)
        self.bob.refresh_from_db()
        self.assertEqual(self.bob.connections, 1)

    def test_reject(self):
        connection = Connection.objects.create(requester=self.alice, receiver=self.bob)
        self.client.force_login(self.bob)
        response = self.client.post(f"/api/connections/{connection.id}/reject")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], ConnectionStatus.REJECTED)
        self.bob.refresh_from_db()
        self.assertEqual(self.bob.connections, 0)
