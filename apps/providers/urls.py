# apps/providers/urls.py
from django.urls import path
from .views import ProviderStatusView, ApplyView

urlpatterns = [
    path('me/', ProviderStatusView.as_view(), name='provider-status'),
    path('apply/', ApplyView.as_view(), name='provider-apply'),
]
