# apps/messaging/serializers.py
from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class ChatMessageSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    room_id = serializers.IntegerField()
    sender_id = serializers.IntegerField()
    content = serializers.CharField()
    created_at = serializers.DateTimeField()
    is_send_by_me = serializers.SerializerMethodField()

    def get_is_send_by_me(self, obj):
        request = self.context.get("request")
        return bool(request) and obj.sender_id == request.user.id


class RoomListItemSerializer(serializers.Serializer):
    room_id = serializers.IntegerField()
    other_id = serializers.IntegerField(allow_null=True)
    other_name = serializers.SerializerMethodField()
    last_content = serializers.CharField(allow_null=True)
    last_at = serializers.DateTimeField(allow_null=True)
    unread_count = serializers.IntegerField()

    def get_other_name(self, obj):
        other = self.context.get('users', {}).get(obj.other_id)
        if other is None:
            return None
        return other.display_name()


class CreateRoomSerializer(serializers.Serializer):
    other_user_id = serializers.IntegerField()


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=True, trim_whitespace=False, max_length=5000)


class HistoryQuerySerializer(serializers.Serializer):
    before = serializers.DateTimeField(required=False)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=100, default=50)
