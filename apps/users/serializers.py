# apps/users/serializers.py
from django.utils import timezone
from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class ProfileSerializer(serializers.ModelSerializer):
    provider_status_display = serializers.CharField(source='get_provider_status_display', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'full_name',
            'gender',
            'address',
            'birth_year',
            'phone_number',
            'is_manager',
            'provider_status',
            'provider_status_display',
            'updated_at',
        ]
        read_only_fields = ['id', 'email', 'is_manager', 'provider_status', 'updated_at']

    def validate_birth_year(self, value):
        if value is None:
            return value
        if not 1900 <= value <= timezone.now().year:
            raise serializers.ValidationError("Invalid birth year")
        return value

    def validate_phone_number(self, value):
        if value:
            value = value.strip()
            digits = value.replace('-', '')
            if not digits.isdigit():
                raise serializers.ValidationError("Phone number must be numeric")
        return value


class ApplicantProfileSerializer(serializers.ModelSerializer):
    """Profile fields shown to managers reviewing an application."""

    class Meta:
        model = User
        fields = ['id', 'email', 'full_name', 'address', 'gender', 'birth_year', 'phone_number']
