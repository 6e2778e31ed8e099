# apps/messaging/realtime.py
"""Room change feed over the Django channel layer.

Every committed message insert is pushed to the room's group
(:func:`publish_message`); a :class:`RoomSubscription` listens on that group
and hands each new message to a callback. Events sent while a subscriber is
disconnected are not replayed.
"""
import asyncio
import inspect
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from .chat import ChatMessage

logger = logging.getLogger(__name__)

MESSAGE_EVENT = 'chat.message'


def room_group(room_id):
    return f"chat.room.{room_id}"


def publish_message(message, channel_layer=None):
    """Push one inserted message to its room group. Sync callers only."""
    layer = channel_layer or get_channel_layer()
    if layer is None:
        logger.warning("No channel layer configured, message %s not published", message.id)
        return
    async_to_sync(layer.group_send)(
        room_group(message.room_id),
        {'type': MESSAGE_EVENT, 'message': message.to_dict()},
    )


class RoomSubscription:
    """Insert events of one room, delivered to ``callback`` in arrival order.

    Use as ``async with RoomSubscription(room_id, cb):`` so the channel is
    released on every exit path, or call :meth:`start` and later
    :meth:`unsubscribe` (safe to call repeatedly).
    """

    def __init__(self, room_id, callback, channel_layer=None):
        self.room_id = room_id
        self.callback = callback
        self.channel_layer = channel_layer or get_channel_layer()
        self.group = room_group(room_id)
        self.channel_name = None
        self._task = None
        self._closed = False

    @property
    def active(self):
        return self._task is not None and not self._task.done() and not self._closed

    async def start(self):
        if self._closed:
            raise RuntimeError("Subscription already closed")
        if self._task is not None:
            return self

        try:
            self.channel_name = await self.channel_layer.new_channel()
            await self.channel_layer.group_add(self.group, self.channel_name)
        except Exception:
            await self.unsubscribe()
            raise

        self._task = asyncio.ensure_future(self._listen())
        logger.debug("Subscribed %s to %s", self.channel_name, self.group)
        return self

    async def _listen(self):
        while True:
            try:
                event = await self.channel_layer.receive(self.channel_name)
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Receive failed on %s, subscription to %s stopped", self.channel_name, self.group)
                return
            if event.get('type') != MESSAGE_EVENT:
                continue
            try:
                message = ChatMessage.from_event(event['message'])
            except (KeyError, TypeError, ValueError):
                logger.warning("Dropped malformed event on %s: %r", self.group, event)
                continue
            try:
                result = self.callback(message)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Subscriber callback failed for message %s", message.id)

    async def unsubscribe(self):
        if self._closed:
            return
        self._closed = True

        try:
            if self._task is not None:
                self._task.cancel()
                try:
                    await self._task
                except asyncio.CancelledError:
                    pass
                except Exception:
                    logger.exception("Listener on %s ended with an error", self.group)
        finally:
            if self.channel_name is not None:
                try:
                    await self.channel_layer.group_discard(self.group, self.channel_name)
                except Exception:
                    logger.exception("Failed to leave %s with %s", self.group, self.channel_name)
        logger.debug("Unsubscribed %s from %s", self.channel_name, self.group)

    async def __aenter__(self):
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb):
        await self.unsubscribe()


async def subscribe_room_messages(room_id, callback, channel_layer=None):
    """Start a subscription; its ``unsubscribe`` is the cancellation handle."""
    return await RoomSubscription(room_id, callback, channel_layer).start()
