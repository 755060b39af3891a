"""
WebSocket relay.

Every frame a client sends is parsed as JSON and re-sent to all other
connected clients. Frames are not scoped to users and delivery is best
effort.
"""
import json
import logging

from channels.generic.websocket import AsyncWebsocketConsumer

from .services import RELAY_GROUP

logger = logging.getLogger(__name__)


class RelayConsumer(AsyncWebsocketConsumer):

    async def connect(self):
        await self.channel_layer.group_add(RELAY_GROUP, self.channel_name)
        await self.accept()
        logger.info(f"WebSocket client connected ({self.channel_name})")

    async def disconnect(self, code):
        await self.channel_layer.group_discard(RELAY_GROUP, self.channel_name)
        logger.info(f"WebSocket client disconnected ({self.channel_name}, code={code})")

    async def receive(self, text_data=None, bytes_data=None):
        if text_data is None:
            logger.error("Dropping binary WebSocket frame")
            return

        try:
            payload = json.loads(text_data)
        except json.JSONDecodeError as e:
            logger.error(f"Dropping invalid JSON frame: {e}")
            return

        await self.channel_layer.group_send(
            RELAY_GROUP,
            {
                "type": "relay.frame",
                "sender_channel": self.channel_name,
                "payload": payload,
            },
        )

    async def relay_frame(self, event):
        # The sender never gets its own frame back
        if event.get("sender_channel") == self.channel_name:
            return
        await self.send(text_data=json.dumps(event["payload"]))
