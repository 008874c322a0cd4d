"""
Hosted binding: events are triggered on a Pusher channel and Pusher fans them out
"""
import asyncio
import logging
from typing import Any, Dict

import pusher

from peerpulse.models import Settings
from peerpulse.transport.base import Transport


logger = logging.getLogger(__name__)


class PusherTransport(Transport):
    """
    Broadcast through the Pusher HTTP API

    Subscribers connect to Pusher directly. Private/presence channels call
    back into /api/pusher-auth, which signs a short-lived token for the
    (socket_id, channel_name) pair via authorize().
    """

    name = "pusher"

    def __init__(self, client: pusher.Pusher, channel: str = "presentation"):
        self.client = client
        self.channel = channel

    @classmethod
    def from_settings(cls, settings: Settings) -> "PusherTransport":
        client = pusher.Pusher(
            app_id=settings.pusher_app_id,
            key=settings.pusher_key,
            secret=settings.pusher_secret,
            cluster=settings.pusher_cluster,
            ssl=True,
        )
        return cls(client, channel=settings.channel_name)

    async def broadcast(self, event: str, payload: Any = None) -> None:
        # pusher.Pusher.trigger is a blocking HTTP call
        await asyncio.to_thread(self.client.trigger, self.channel, event, payload)

    def authorize(self, socket_id: str, channel_name: str) -> Dict[str, str]:
        """
        Sign a channel subscription for one socket

        Raises:
            ValueError: If socket_id or channel_name is malformed
        """
        return self.client.authenticate(channel=channel_name, socket_id=socket_id)

    def describe(self) -> Dict[str, Any]:
        return {"transport": self.name, "channel": self.channel}
