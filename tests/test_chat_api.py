from datetime import timedelta

import pytest
from django.utils import timezone

from apps.messaging import chat
from apps.messaging.models import Message, Participant

pytestmark = pytest.mark.django_db

ROOMS_URL = '/api/chat/rooms/'


def messages_url(room_id):
    return f'/api/chat/rooms/{room_id}/messages/'


def test_chat_requires_authentication(api_client):
    assert api_client.get(ROOMS_URL).status_code == 401


def test_create_room_returns_same_id_for_both_sides(client_for, alice, bob):
    res = client_for(alice).post(ROOMS_URL, {'other_user_id': bob.id}, format='json')
    again = client_for(bob).post(ROOMS_URL, {'other_user_id': alice.id}, format='json')

    assert res.status_code == 200
    assert res.data['success'] is True
    assert again.data['room_id'] == res.data['room_id']


def test_create_room_with_self_is_rejected(client_for, alice):
    res = client_for(alice).post(ROOMS_URL, {'other_user_id': alice.id}, format='json')
    assert res.status_code == 400


def test_create_room_requires_other_user(client_for, alice):
    res = client_for(alice).post(ROOMS_URL, {}, format='json')
    assert res.status_code == 400


def test_room_list_includes_peer_name_and_unread(client_for, alice, bob):
    room_id = chat.ensure_dm_room(alice.id, bob.id)
    chat.send_message(room_id, bob.id, "quote for the kitchen?")

    res = client_for(alice).get(ROOMS_URL)

    assert res.status_code == 200
    [room] = res.data['rooms']
    assert room['room_id'] == room_id
    assert room['other_id'] == bob.id
    assert room['other_name'] == 'Bob Lee'
    assert room['last_content'] == "quote for the kitchen?"
    assert room['unread_count'] == 1


def test_send_and_load_history(client_for, alice, bob):
    room_id = chat.ensure_dm_room(alice.id, bob.id)

    sent = client_for(alice).post(messages_url(room_id), {'content': '  hello  '}, format='json')
    assert sent.status_code == 201
    assert sent.data['message']['content'] == 'hello'
    assert sent.data['message']['is_send_by_me'] is True

    history = client_for(bob).get(messages_url(room_id))
    assert history.status_code == 200
    assert [m['content'] for m in history.data['messages']] == ['hello']
    assert history.data['messages'][0]['is_send_by_me'] is False

    # Loading history marks the room read
    assert chat.unread_count(room_id, bob.id) == 0


def test_blank_message_is_dropped(client_for, alice, bob):
    room_id = chat.ensure_dm_room(alice.id, bob.id)

    res = client_for(alice).post(messages_url(room_id), {'content': '   '}, format='json')

    assert res.status_code == 204
    assert not Message.objects.exists()


def test_history_pagination_params(client_for, alice, bob):
    room_id = chat.ensure_dm_room(alice.id, bob.id)
    start = timezone.now() - timedelta(hours=1)
    for i in range(4):
        message = chat.send_message(room_id, alice.id, f"m{i}")
        Message.objects.filter(id=message.id).update(created_at=start + timedelta(minutes=i))

    client = client_for(bob)
    res = client.get(messages_url(room_id), {'limit': 2})
    assert [m['content'] for m in res.data['messages']] == ['m2', 'm3']

    before = (start + timedelta(minutes=2)).isoformat()
    res = client.get(messages_url(room_id), {'before': before, 'limit': 10})
    assert [m['content'] for m in res.data['messages']] == ['m0', 'm1']

    assert client.get(messages_url(room_id), {'limit': 0}).status_code == 400


def test_outsider_cannot_read_or_write(client_for, alice, bob, carol):
    room_id = chat.ensure_dm_room(alice.id, bob.id)
    client = client_for(carol)

    assert client.get(messages_url(room_id)).status_code == 403
    assert client.post(messages_url(room_id), {'content': 'hi'}, format='json').status_code == 403
    assert client.post(f'/api/chat/rooms/{room_id}/read/').status_code == 403


def test_mark_room_read_endpoint(client_for, alice, bob):
    room_id = chat.ensure_dm_room(alice.id, bob.id)
    chat.send_message(room_id, alice.id, "ping")

    res = client_for(bob).post(f'/api/chat/rooms/{room_id}/read/')

    assert res.status_code == 200
    assert res.data['unread_count'] == 0
    assert Participant.objects.get(room_id=room_id, user=bob).last_read_at is not None
    assert chat.unread_count(room_id, bob.id) == 0
