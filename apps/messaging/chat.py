# apps/messaging/chat.py
"""Direct-message chat helpers.

Rooms, participants and messages live in the database; the realtime side
(change feed and subscriptions) is in :mod:`apps.messaging.realtime`.
"""
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone as dt_timezone
from typing import List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, OperationalError, transaction
from django.db.models import Count, DateTimeField, IntegerField, OuterRef, Subquery, TextField, Value
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.dateparse import parse_datetime
from rest_framework.exceptions import PermissionDenied, ValidationError

from .models import Message, Participant, Room, dm_key_for

logger = logging.getLogger(__name__)
User = get_user_model()

EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)
DEFAULT_HISTORY_LIMIT = 50
ROOM_RESOLVE_ATTEMPTS = 3


class InvalidOperation(ValidationError):
    default_detail = 'Invalid chat operation.'
    default_code = 'invalid_operation'


class NotParticipant(PermissionDenied):
    default_detail = 'You are not a participant of this room.'
    default_code = 'not_participant'


@dataclass
class ChatMessage:
    id: int
    room_id: int
    sender_id: int
    content: str
    created_at: datetime

    @classmethod
    def from_instance(cls, message):
        return cls(
            id=message.id,
            room_id=message.room_id,
            sender_id=message.sender_id,
            content=message.content,
            created_at=message.created_at,
        )

    @classmethod
    def from_event(cls, payload):
        created_at = payload['created_at']
        if isinstance(created_at, str):
            created_at = parse_datetime(created_at)
        return cls(
            id=int(payload['id']),
            room_id=int(payload['room_id']),
            sender_id=int(payload['sender_id']),
            content=payload['content'],
            created_at=created_at,
        )

    def to_dict(self):
        data = asdict(self)
        data['created_at'] = self.created_at.isoformat()
        return data


@dataclass
class ChatRoomListItem:
    room_id: int
    other_id: Optional[int]
    last_content: Optional[str] = None
    last_at: Optional[datetime] = None
    unread_count: int = 0

    def to_dict(self):
        data = asdict(self)
        data['last_at'] = self.last_at.isoformat() if self.last_at else None
        return data


def _as_user_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidOperation('Invalid user ids')


def is_participant(room_id, user_id):
    return Participant.objects.filter(room_id=room_id, user_id=user_id).exists()


# --- Room resolver ---

def _create_or_get_dm_room(key, me, other):
    room = Room.objects.filter(dm_key=key).first()
    if room is not None:
        return room.id

    try:
        with transaction.atomic():
            room = Room.objects.create(kind=Room.KIND_DIRECT, dm_key=key)
            Participant.objects.bulk_create([
                Participant(room=room, user_id=me),
                Participant(room=room, user_id=other),
            ])
    except IntegrityError:
        # The other participant created the same room first; anything else
        # (e.g. a user deleted mid-call) is re-raised as is
        room = Room.objects.filter(dm_key=key).first()
        if room is None:
            raise
        logger.info("DM room %s created concurrently, reusing it", key)
        return room.id

    logger.info("Created DM room %s for users %s", room.id, key)
    return room.id


def ensure_dm_room(me, other) -> int:
    """Return the direct room shared by ``me`` and ``other``, creating it once."""
    if not me or not other:
        raise InvalidOperation('Invalid user ids')
    me, other = _as_user_id(me), _as_user_id(other)
    if me == other:
        raise InvalidOperation('You cannot start a direct message with yourself.')
    if User.objects.filter(id__in=[me, other]).count() != 2:
        raise InvalidOperation('Unknown user')

    key = dm_key_for(me, other)
    for attempt in range(1, ROOM_RESOLVE_ATTEMPTS + 1):
        try:
            return _create_or_get_dm_room(key, me, other)
        except OperationalError:
            if attempt == ROOM_RESOLVE_ATTEMPTS:
                raise
            logger.warning("Transient error resolving DM room %s (attempt %d)", key, attempt)


# --- Messages ---

def send_message(room_id, sender_id, content) -> Optional[ChatMessage]:
    """Append a trimmed message. Whitespace-only content is dropped."""
    text = (content or '').strip()
    if not text:
        return None
    if not is_participant(room_id, sender_id):
        raise NotParticipant()

    message = Message.objects.create(room_id=room_id, sender_id=sender_id, content=text)
    return ChatMessage.from_instance(message)


def fetch_room_messages(room_id, before=None, limit=DEFAULT_HISTORY_LIMIT) -> List[ChatMessage]:
    """Up to ``limit`` messages older than ``before``, oldest first."""
    if isinstance(before, str):
        parsed = parse_datetime(before)
        if parsed is None:
            raise InvalidOperation('Invalid "before" timestamp')
        before = parsed
    if before is not None and timezone.is_naive(before):
        before = timezone.make_aware(before, dt_timezone.utc)
    if limit is None:
        limit = DEFAULT_HISTORY_LIMIT
    if limit <= 0:
        raise InvalidOperation('limit must be positive')

    queryset = Message.objects.filter(room_id=room_id)
    if before is not None:
        queryset = queryset.filter(created_at__lt=before)

    newest_first = list(queryset.order_by('-created_at', '-id')[:limit])
    return [ChatMessage.from_instance(m) for m in reversed(newest_first)]


# --- Read tracking ---

def mark_room_read(room_id, user_id):
    updated = Participant.objects.filter(room_id=room_id, user_id=user_id).update(
        last_read_at=timezone.now()
    )
    if not updated:
        raise NotParticipant()


def mark_room_read_quietly(room_id, user_id):
    """Receive-path variant: never raises."""
    try:
        mark_room_read(room_id, user_id)
    except Exception:
        logger.exception("Failed to mark room %s read for user %s", room_id, user_id)


def unread_count(room_id, user_id) -> int:
    last_read_at = (
        Participant.objects.filter(room_id=room_id, user_id=user_id)
        .values_list('last_read_at', flat=True)
        .first()
    )
    return (
        Message.objects.filter(room_id=room_id, created_at__gt=last_read_at or EPOCH)
        .exclude(sender_id=user_id)
        .count()
    )


# --- Room list ---

class RoomListStrategy:
    name = None

    def is_available(self):
        return True

    def fetch(self, user_id) -> List[ChatRoomListItem]:
        raise NotImplementedError


class AggregatedRoomList(RoomListStrategy):
    """One query: every membership annotated with peer, last message and unread count."""
    name = 'aggregated'

    def is_available(self):
        return getattr(settings, 'CHAT_ROOM_LIST_AGGREGATION', True)

    def fetch(self, user_id):
        room_messages = Message.objects.filter(room=OuterRef('room')).order_by('-created_at', '-id')
        other = (
            Participant.objects.filter(room=OuterRef('room'))
            .exclude(user_id=user_id)
            .order_by('id')
            .values('user_id')[:1]
        )
        unread = (
            Message.objects.filter(room=OuterRef('room'))
            .exclude(sender_id=user_id)
            .filter(created_at__gt=Coalesce(
                OuterRef('last_read_at'), Value(EPOCH), output_field=DateTimeField()
            ))
            .order_by()
            .values('room')
            .annotate(total=Count('id'))
            .values('total')
        )

        rows = (
            Participant.objects.filter(user_id=user_id)
            .annotate(
                other_id=Subquery(other, output_field=IntegerField()),
                last_content=Subquery(room_messages.values('content')[:1], output_field=TextField()),
                last_at=Subquery(room_messages.values('created_at')[:1], output_field=DateTimeField()),
                unread_count=Coalesce(Subquery(unread, output_field=IntegerField()), Value(0)),
            )
            .values('room_id', 'other_id', 'last_content', 'last_at', 'unread_count')
        )
        return [ChatRoomListItem(**row) for row in rows]


class ComposedRoomList(RoomListStrategy):
    """Per-room queries (N+1); used when the aggregate query is unavailable."""
    name = 'composed'

    def fetch(self, user_id):
        memberships = list(
            Participant.objects.filter(user_id=user_id).values('room_id', 'last_read_at')
        )
        if not memberships:
            return []

        room_ids = [m['room_id'] for m in memberships]
        others = dict(
            Participant.objects.filter(room_id__in=room_ids)
            .exclude(user_id=user_id)
            .values_list('room_id', 'user_id')
        )

        items = []
        for membership in memberships:
            room_id = membership['room_id']
            last = (
                Message.objects.filter(room_id=room_id)
                .order_by('-created_at', '-id')
                .values('content', 'created_at')
                .first()
            )
            unread = (
                Message.objects.filter(
                    room_id=room_id,
                    created_at__gt=membership['last_read_at'] or EPOCH,
                )
                .exclude(sender_id=user_id)
                .count()
            )
            items.append(ChatRoomListItem(
                room_id=room_id,
                other_id=others.get(room_id),
                last_content=last['content'] if last else None,
                last_at=last['created_at'] if last else None,
                unread_count=unread,
            ))
        return items


def sort_rooms(items):
    return sorted(items, key=lambda item: item.last_at or EPOCH, reverse=True)


def fetch_my_rooms(user_id, primary=None, fallback=None) -> List[ChatRoomListItem]:
    """Rooms of ``user_id``, most recent message first."""
    primary = primary or AggregatedRoomList()
    fallback = fallback or ComposedRoomList()

    if primary.is_available():
        try:
            with transaction.atomic():
                items = primary.fetch(user_id)
        except DatabaseError:
            logger.warning(
                "Room list strategy %s failed, falling back to %s",
                primary.name, fallback.name, exc_info=True
            )
        else:
            return sort_rooms(items)

    return sort_rooms(fallback.fetch(user_id))
