# apps/providers/models.py
from django.db import models
from django.contrib.auth import get_user_model

User = get_user_model()


class ProviderApplication(models.Model):
    STATUS_PENDING = 0
    STATUS_APPROVED = 1
    STATUS_REJECTED = 2

    STATUS_CHOICES = (
        (STATUS_PENDING, 'Pending'),
        (STATUS_APPROVED, 'Approved'),
        (STATUS_REJECTED, 'Rejected'),
    )

    applicant = models.ForeignKey(User, on_delete=models.CASCADE, related_name='provider_applications')
    business_reg = models.URLField(max_length=500)      # 사업자등록증
    portfolio = models.URLField(max_length=500, blank=True, default='')
    memo = models.TextField(blank=True, default='')
    status = models.PositiveSmallIntegerField(choices=STATUS_CHOICES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_applications'
    )

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.applicant} ({self.get_status_display()})"
