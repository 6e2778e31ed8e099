# apps/messaging/signals.py
import logging

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from .chat import ChatMessage
from .models import Message
from .realtime import publish_message

logger = logging.getLogger(__name__)


def _publish(message):
    try:
        publish_message(message)
    except Exception:
        # The row is already committed; a lost push is a transport gap
        logger.exception("Failed to publish message %s to room %s", message.id, message.room_id)


@receiver(post_save, sender=Message)
def message_inserted(sender, instance, created, **kwargs):
    if not created:
        return
    message = ChatMessage.from_instance(instance)
    transaction.on_commit(lambda: _publish(message))
