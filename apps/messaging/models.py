# apps/messaging/models.py
from django.db import models
from django.contrib.auth import get_user_model

User = get_user_model()


def dm_key_for(user_a, user_b):
    """Canonical key of an unordered user pair, ``"<low>:<high>"``."""
    low, high = sorted([int(user_a), int(user_b)])
    return f"{low}:{high}"


class Room(models.Model):
    KIND_DIRECT = 'direct'
    KIND_SUPPORT = 'support'

    KIND_CHOICES = (
        (KIND_DIRECT, 'Direct message'),
        (KIND_SUPPORT, 'Support'),
    )

    kind = models.CharField(max_length=10, choices=KIND_CHOICES, default=KIND_DIRECT)
    # Only direct rooms carry a pair key; NULLs do not collide on the unique index
    dm_key = models.CharField(max_length=64, unique=True, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.get_kind_display()} #{self.id}"


class Participant(models.Model):
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='participants')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='chat_participations')
    joined_at = models.DateTimeField(auto_now_add=True)
    last_read_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        unique_together = ('room', 'user')

    def __str__(self):
        return f"{self.user} in room #{self.room_id}"


class Message(models.Model):
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='chat_messages')
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['room', 'created_at'], name='message_room_created_idx'),
        ]

    def __str__(self):
        return f"{self.sender}: {self.content[:30]}"
