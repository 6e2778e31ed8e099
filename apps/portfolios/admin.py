# apps/portfolios/admin.py
from django.contrib import admin
from .models import Portfolio, PortfolioImage


class PortfolioImageInline(admin.TabularInline):
    model = PortfolioImage
    extra = 0


@admin.register(Portfolio)
class PortfolioAdmin(admin.ModelAdmin):
    list_display = ("project_title", "store", "type", "location", "published", "created_at")
    list_filter = ("published", "type")
    search_fields = ("project_title", "store__name", "location")
    inlines = [PortfolioImageInline]
