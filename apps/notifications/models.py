# apps/notifications/models.py
from django.db import models
from django.contrib.auth import get_user_model

User = get_user_model()


class Notification(models.Model):
    KIND_CHOICES = (
        ('application', 'Contractor application'),
        ('system', 'System'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    kind = models.CharField(max_length=20, choices=KIND_CHOICES, default='system')
    message = models.CharField(max_length=255)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notification_user_read_idx'),
        ]

    def __str__(self):
        return f"{self.user}: {self.message[:30]}"

    @classmethod
    def notify(cls, user, message, kind='system'):
        return cls.objects.create(user=user, message=message, kind=kind)

    @classmethod
    def unread_count(cls, user):
        return cls.objects.filter(user=user, is_read=False).count()
