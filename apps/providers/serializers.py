# apps/providers/serializers.py
from rest_framework import serializers

from apps.users.serializers import ApplicantProfileSerializer
from .models import ProviderApplication


class ApplySerializer(serializers.Serializer):
    business_reg_file = serializers.FileField()
    portfolio = serializers.URLField(max_length=500, required=False, allow_blank=True, default='')
    memo = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_business_reg_file(self, value):
        content_type = getattr(value, 'content_type', '') or ''
        if content_type != 'application/pdf' and not content_type.startswith('image/'):
            raise serializers.ValidationError("Business registration must be a PDF or an image")
        return value


class ApplicationSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = ProviderApplication
        fields = ['id', 'business_reg', 'portfolio', 'memo', 'status', 'status_display', 'created_at']


class ApplicantSerializer(serializers.ModelSerializer):
    """Pending application row in the manager console."""
    applicant = ApplicantProfileSerializer(read_only=True)

    class Meta:
        model = ProviderApplication
        fields = ['id', 'applicant', 'business_reg', 'portfolio', 'memo', 'created_at']
