# apps/users/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


# ==================== CUSTOM USER ADMIN ====================
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("id", "email", "full_name", "provider_status", "is_manager", "date_joined", "is_active")
    list_filter = ("provider_status", "is_manager", "is_active", "date_joined")
    search_fields = ("email", "full_name", "phone_number")
    ordering = ("-date_joined",)
    readonly_fields = ("date_joined", "last_login")

    fieldsets = (
        (None, {"fields": ("username", "email", "password")}),
        ("Personal Info", {"fields": ("full_name", "gender", "birth_year", "address", "phone_number")}),
        ("Contractor", {"fields": ("provider_status",)}),
        ("Status", {"fields": ("is_manager", "is_active", "is_staff", "is_superuser")}),
        ("Timestamps", {"fields": ("date_joined", "last_login")}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("username", "email", "full_name", "password1", "password2"),
        }),
    )
