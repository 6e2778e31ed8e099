# apps/users/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    PROVIDER_NONE = 0
    PROVIDER_APPROVED = 1
    PROVIDER_REVIEWING = 2
    PROVIDER_REJECTED = 3

    PROVIDER_STATUS_CHOICES = (
        (PROVIDER_NONE, 'Customer'),
        (PROVIDER_APPROVED, 'Approved contractor'),
        (PROVIDER_REVIEWING, 'Under review'),
        (PROVIDER_REJECTED, 'Rejected'),
    )

    GENDER_CHOICES = (
        ('male', 'Male'),
        ('female', 'Female'),
    )

    full_name = models.CharField(max_length=255, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True, null=True)
    address = models.CharField(max_length=255, blank=True, null=True)
    birth_year = models.PositiveIntegerField(blank=True, null=True)
    phone_number = models.CharField(max_length=20, blank=True, null=True)
    is_manager = models.BooleanField(default=False)
    provider_status = models.PositiveSmallIntegerField(
        choices=PROVIDER_STATUS_CHOICES, default=PROVIDER_NONE
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_provider(self):
        return self.provider_status == self.PROVIDER_APPROVED

    def display_name(self):
        return self.full_name.strip() or self.email or self.username

    def __str__(self):
        return self.email or self.username
