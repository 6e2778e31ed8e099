# apps/portfolios/models.py
from django.db import models
from apps.stores.models import Store


class Portfolio(models.Model):
    store = models.ForeignKey(Store, on_delete=models.CASCADE, related_name='portfolios')
    project_title = models.CharField(max_length=200)
    type = models.CharField(max_length=50, blank=True, null=True)          # 아파트, 주택, 상가...
    area = models.DecimalField(max_digits=8, decimal_places=2, blank=True, null=True)  # 평수
    location = models.CharField(max_length=100, blank=True, null=True)
    style = models.CharField(max_length=50, blank=True, null=True)
    duration = models.CharField(max_length=50, blank=True, null=True)
    personnel = models.PositiveIntegerField(blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)
    content = models.TextField(blank=True, default='')                     # rich-text HTML
    cover_url = models.URLField(max_length=500, blank=True, null=True)
    published = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.project_title} ({self.store.name})"


class PortfolioImage(models.Model):
    portfolio = models.ForeignKey(Portfolio, on_delete=models.CASCADE, related_name='images')
    url = models.URLField(max_length=500)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ['sort_order']

    def __str__(self):
        return f"Image #{self.sort_order} for portfolio #{self.portfolio_id}"
