# apps/messaging/socket.py

import logging

import socketio
from channels.db import database_sync_to_async
from django.contrib.auth import get_user_model
from rest_framework.exceptions import APIException
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import UntypedToken

from apps.messaging import chat
from apps.messaging.realtime import subscribe_room_messages

logger = logging.getLogger(__name__)
User = get_user_model()

# Global tracking
connected_users = {}     # sid → user_id
room_subscriptions = {}  # sid → {room_id: RoomSubscription}

sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins="*")


# --- Helpers ---
@database_sync_to_async
def get_user_by_id(user_id):
    return User.objects.get(id=user_id, is_active=True)


def user_id_from_token(token):
    token = token.replace("Bearer ", "")
    payload = UntypedToken(token)
    return int(payload['user_id'])


def _room_id(data):
    try:
        return int((data or {}).get('room_id'))
    except (TypeError, ValueError):
        return None


def _error_text(exc):
    detail = exc.detail
    if isinstance(detail, list) and detail:
        detail = detail[0]
    return str(detail)


async def _emit_error(sid, message):
    await sio.emit('error', {'error': message}, to=sid)


# --- Socket.IO events ---
@sio.event
async def connect(sid, environ, auth):
    token = auth.get('token') if isinstance(auth, dict) else None
    if not token or not isinstance(token, str):
        return False

    try:
        user = await get_user_by_id(user_id_from_token(token))
    except (TokenError, KeyError, ValueError, User.DoesNotExist) as e:
        logger.info("Socket connection rejected: %s", e)
        return False

    connected_users[sid] = user.id
    await sio.save_session(sid, {'user_id': user.id})
    await sio.enter_room(sid, str(user.id))

    logger.info("Connected: %s (%s)", user.display_name(), user.id)
    return True


@sio.event
async def join_room(sid, data):
    user_id = connected_users.get(sid)
    if not user_id:
        return

    room_id = _room_id(data)
    if room_id is None:
        await _emit_error(sid, 'Invalid data')
        return

    allowed = await database_sync_to_async(chat.is_participant)(room_id, user_id)
    if not allowed:
        await _emit_error(sid, 'Access denied')
        return
    if connected_users.get(sid) != user_id:
        return

    subscriptions = room_subscriptions.setdefault(sid, {})
    if room_id in subscriptions:
        return {'ok': True, 'room_id': room_id}

    async def deliver(message):
        await sio.emit('new_message', message.to_dict(), to=sid)
        if message.sender_id != user_id and sid in connected_users:
            await database_sync_to_async(chat.mark_room_read_quietly)(room_id, user_id)

    subscription = await subscribe_room_messages(room_id, deliver)

    # The sid may have disconnected, or joined the same room, while subscribing
    if connected_users.get(sid) != user_id or room_subscriptions.get(sid) is not subscriptions:
        await subscription.unsubscribe()
        return
    if room_id in subscriptions:
        await subscription.unsubscribe()
        return {'ok': True, 'room_id': room_id}

    subscriptions[room_id] = subscription
    await database_sync_to_async(chat.mark_room_read_quietly)(room_id, user_id)
    return {'ok': True, 'room_id': room_id}


@sio.event
async def leave_room(sid, data):
    room_id = _room_id(data)
    subscription = room_subscriptions.get(sid, {}).pop(room_id, None)
    if subscription is not None:
        await subscription.unsubscribe()
    return {'ok': True, 'room_id': room_id}


@sio.event
async def send_message(sid, data):
    user_id = connected_users.get(sid)
    if not user_id:
        return

    data = data or {}
    content = data.get('message', '')
    to_user = data.get('to_user')
    room_id = _room_id(data)

    if room_id is None and not to_user:
        await _emit_error(sid, 'Invalid data')
        return

    try:
        if room_id is None:
            room_id = await database_sync_to_async(chat.ensure_dm_room)(user_id, to_user)
        message = await database_sync_to_async(chat.send_message)(room_id, user_id, content)
    except APIException as e:
        await _emit_error(sid, _error_text(e))
        return

    if message is None:
        return

    await sio.emit('message_sent', message.to_dict(), to=sid)


@sio.event
async def disconnect(sid):
    user_id = connected_users.pop(sid, None)
    for room_id, subscription in room_subscriptions.pop(sid, {}).items():
        try:
            await subscription.unsubscribe()
        except Exception:
            logger.exception("Failed to release room %s subscription of %s", room_id, sid)
    logger.info("Disconnected: %s", user_id)
