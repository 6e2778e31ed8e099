# apps/portfolios/urls.py
from django.urls import path

from apps.uploads.views import UploadImageView
from .views import PortfolioListCreateView, PortfolioDetailView

urlpatterns = [
    path('', PortfolioListCreateView.as_view(), name='portfolio-list'),
    path('upload/', UploadImageView.as_view(default_folder='portfolios/content'), name='portfolio-upload'),
    path('<int:portfolio_id>/', PortfolioDetailView.as_view(), name='portfolio-detail'),
]
