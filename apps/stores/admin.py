# apps/stores/admin.py
from django.contrib import admin
from django.utils.html import format_html
from .models import Store


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "owner_link", "categories_list", "is_published", "updated_at")
    list_filter = ("is_published",)
    search_fields = ("name", "address", "owner__email", "owner__full_name")
    list_editable = ("is_published",)
    readonly_fields = ("created_at", "updated_at")

    def owner_link(self, obj):
        return format_html(
            '<a href="/admin/users/user/{}/change/">{} ({})</a>',
            obj.owner.id, obj.owner.full_name or "No Name", obj.owner.email
        )
    owner_link.short_description = "Owner"

    def categories_list(self, obj):
        if not obj.categories:
            return "-"
        return ", ".join(obj.categories[:5]) + ("..." if len(obj.categories) > 5 else "")
    categories_list.short_description = "Categories"
