# apps/providers/manage_urls.py
from django.urls import path
from .views import (
    ManageSummaryView,
    ApplicantListView,
    approve_application,
    reject_application,
)

urlpatterns = [
    path('summary/', ManageSummaryView.as_view(), name='manage-summary'),
    path('applicants/', ApplicantListView.as_view(), name='manage-applicants'),
    path('applicants/<int:application_id>/approve/', approve_application, name='approve-application'),
    path('applicants/<int:application_id>/reject/', reject_application, name='reject-application'),
]
