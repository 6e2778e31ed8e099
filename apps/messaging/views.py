# apps/messaging/views.py
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from django.contrib.auth import get_user_model

from . import chat
from .serializers import (
    ChatMessageSerializer,
    CreateRoomSerializer,
    HistoryQuerySerializer,
    RoomListItemSerializer,
    SendMessageSerializer,
)

User = get_user_model()


def _access_denied():
    return Response({"success": False, "message": "Access denied"}, status=status.HTTP_403_FORBIDDEN)


class RoomListView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = CreateRoomSerializer

    def get(self, request):
        rooms = chat.fetch_my_rooms(request.user.id)

        other_ids = {room.other_id for room in rooms if room.other_id}
        users = {u.id: u for u in User.objects.filter(id__in=other_ids)}

        serializer = RoomListItemSerializer(rooms, many=True, context={"request": request, "users": users})
        return Response({"success": True, "rooms": serializer.data})

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        room_id = chat.ensure_dm_room(request.user.id, serializer.validated_data['other_user_id'])
        return Response({"success": True, "room_id": room_id})


class RoomMessagesView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = SendMessageSerializer

    def get(self, request, room_id):
        if not chat.is_participant(room_id, request.user.id):
            return _access_denied()

        query = HistoryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        messages = chat.fetch_room_messages(
            room_id,
            before=query.validated_data.get('before'),
            limit=query.validated_data['limit'],
        )
        chat.mark_room_read(room_id, request.user.id)

        return Response({
            "success": True,
            "room_id": room_id,
            "messages": ChatMessageSerializer(messages, many=True, context={"request": request}).data
        })

    def post(self, request, room_id):
        if not chat.is_participant(room_id, request.user.id):
            return _access_denied()

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        message = chat.send_message(room_id, request.user.id, serializer.validated_data['content'])
        if message is None:
            return Response(status=status.HTTP_204_NO_CONTENT)

        return Response({
            "success": True,
            "message": ChatMessageSerializer(message, context={"request": request}).data
        }, status=status.HTTP_201_CREATED)


class MarkRoomReadView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request, room_id):
        if not chat.is_participant(room_id, request.user.id):
            return _access_denied()

        chat.mark_room_read(room_id, request.user.id)
        return Response({"success": True, "room_id": room_id, "unread_count": 0})
