# apps/providers/admin.py
from django.contrib import admin
from .models import ProviderApplication


@admin.register(ProviderApplication)
class ProviderApplicationAdmin(admin.ModelAdmin):
    list_display = ("id", "applicant", "status", "created_at", "reviewed_at")
    list_filter = ("status",)
    search_fields = ("applicant__email", "applicant__full_name", "memo")
    readonly_fields = ("created_at", "reviewed_at", "reviewed_by")
