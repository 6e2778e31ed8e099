# apps/messaging/admin.py
from django.contrib import admin
from .models import Room, Participant, Message


class ParticipantInline(admin.TabularInline):
    model = Participant
    extra = 0
    readonly_fields = ("joined_at", "last_read_at")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("id", "kind", "dm_key", "created_at")
    list_filter = ("kind",)
    inlines = [ParticipantInline]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "room", "sender", "short_content", "created_at")
    search_fields = ("content", "sender__email")
    readonly_fields = ("room", "sender", "content", "created_at")

    def short_content(self, obj):
        return obj.content[:40]
    short_content.short_description = "Content"
