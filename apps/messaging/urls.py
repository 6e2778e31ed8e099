# apps/messaging/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('rooms/', views.RoomListView.as_view(), name='chat-rooms'),
    path('rooms/<int:room_id>/messages/', views.RoomMessagesView.as_view(), name='chat-messages'),
    path('rooms/<int:room_id>/read/', views.MarkRoomReadView.as_view(), name='chat-read'),
]
