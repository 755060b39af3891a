"""
Tests for direct messages and the WebSocket relay.
"""
import json

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from unittest import mock

from django.test import TestCase, SimpleTestCase, TransactionTestCase, Client
from django.contrib.auth import get_user_model

from .models import Message
from .routing import websocket_urlpatterns
from .services import RELAY_GROUP


User = get_user_model()


class MessageAPITest(TestCase):
    def setUp(self):
        self.client = Client()
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.bob = User.objects.create_user(username="bob", password="pw")
        self.carol = User.objects.create_user(username="carol", password="pw")

    def _send(self, receiver_id, content):
        return self.client.post(
            "/api/messages/",
            data=json.dumps({"receiver_id": str(receiver_id), "content": content}),
            content_type="application/json",
        )

    def test_send_message(self):
        self.client.force_login(self.alice)
        response = self._send(self.bob.id, "Are you coming to the lab?")
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["sender_id"], str(self.alice.id))
        self.assertFalse(data["read"])

    def test_empty_message_rejected(self):
        self.client.force_login(self.alice)
        response = self._send(self.bob.id, "  ")
        self.assertEqual(response.status_code, 400)

    def test_message_self_rejected(self):
        self.client.force_login(self.alice)
        response = self._send(self.alice.id, "note to self")
        self.assertEqual(response.status_code, 400)

    def test_unknown_receiver(self):
        self.client.force_login(self.alice)
        response = self._send("00000000-0000-0000-0000-000000000000", "hello")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(Message.objects.count(), 0)

    def test_send_requires_auth(self):
        response = self._send(self.bob.id, "hello")
        self.assertEqual(response.status_code, 401)

    def test_list_only_own_messages(self):
        Message.objects.create(sender=self.alice, receiver=self.bob, content="1")
        Message.objects.create(sender=self.bob, receiver=self.alice, content="2")
        Message.objects.create(sender=self.bob, receiver=self.carol, content="3")

        self.client.force_login(self.alice)
        response = self.client.get("/api/messages/")
        self.assertEqual(sorted(m["content"] for m in response.json()), ["1", "2"])

    def test_conversation_oldest_first(self):
        first = Message.objects.create(sender=self.alice, receiver=self.bob, content="first")
        second = Message.objects.create(sender=self.bob, receiver=self.alice, content="second")
        Message.objects.create(sender=self.carol, receiver=self.alice, content="other")

        self.client.force_login(self.alice)
        response = self.client.get(f"/api/conversations/{self.bob.id}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([m["id"] for m in response.json()], [str(first.id), str(second.id)])

    def test_mark_read_and_unread_count(self):
        message = Message.objects.create(sender=self.alice, receiver=self.bob, content="hi")

        self.client.force_login(self.bob)
        self.assertEqual(self.client.get("/api/messages/unread-count").json()["count"], 1)

        response = self.client.post(f"/api/messages/{message.id}/read")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["read"])
        self.assertEqual(self.client.get("/api/messages/unread-count").json()["count"], 0)

    def test_only_receiver_marks_read(self):
        message = Message.objects.create(sender=self.alice, receiver=self.bob, content="hi")
        self.client.force_login(self.alice)
        response = self.client.post(f"/api/messages/{message.id}/read")
        self.assertEqual(response.status_code, 404)


class NewMessageBroadcastTest(TestCase):
    def setUp(self):
        self.client = Client()
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.bob = User.objects.create_user(username="bob", password="pw")
        self.channel_layer = get_channel_layer()
        self.channel_name = "test-relay-listener"
        async_to_sync(self.channel_layer.group_add)(RELAY_GROUP, self.channel_name)

    def tearDown(self):
        async_to_sync(self.channel_layer.group_discard)(RELAY_GROUP, self.channel_name)

    def test_hint_sent_after_commit(self):
        self.client.force_login(self.alice)
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            response = self.client.post(
                "/api/messages/",
                data=json.dumps({"receiver_id": str(self.bob.id), "content": "ping"}),
                content_type="application/json",
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(callbacks), 1)

        event = async_to_sync(self.channel_layer.receive)(self.channel_name)
        self.assertEqual(event["payload"], {
            "type": "new_message",
            "message_id": response.json()["id"],
            "sender_id": str(self.alice.id),
            "receiver_id": str(self.bob.id),
        })


class UnreachableChannelLayer:
    async def group_send(self, group, message):
        raise ConnectionError("redis down")


class BroadcastFailureTest(TransactionTestCase):
    def setUp(self):
        self.client = Client()
        self.alice = User.objects.create_user(username="alice", password="pw")
        self.bob = User.objects.create_user(username="bob", password="pw")

    def test_send_succeeds_when_relay_is_down(self):
        self.client.force_login(self.alice)
        with mock.patch("apps.messaging.services.get_channel_layer", return_value=UnreachableChannelLayer()):
            response = self.client.post(
                "/api/messages/",
                data=json.dumps({"receiver_id": str(self.bob.id), "content": "ping"}),
                content_type="application/json",
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Message.objects.count(), 1)


class RelayConsumerTest(SimpleTestCase):
    def _communicator(self):
        return WebsocketCommunicator(URLRouter(websocket_urlpatterns), "/ws")

    async def test_frame_relayed_to_other_clients_only(self):
        sender = self._communicator()
        listener = self._communicator()
        connected, _ = await sender.connect()
        self.assertTrue(connected)
        await listener.connect()

        await sender.send_json_to({"type": "typing", "user": "alice"})

        self.assertEqual(await listener.receive_json_from(), {"type": "typing", "user": "alice"})
        self.assertTrue(await sender.receive_nothing())

        await sender.disconnect()
        await listener.disconnect()

    async def test_invalid_json_dropped(self):
        sender = self._communicator()
        listener = self._communicator()
        await sender.connect()
        await listener.connect()

        with self.assertLogs("apps.messaging.consumers", level="ERROR"):
            await sender.send_to(text_data="not json")
            self.assertTrue(await listener.receive_nothing())

        await sender.disconnect()
        await listener.disconnect()
