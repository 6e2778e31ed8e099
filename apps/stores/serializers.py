# apps/stores/serializers.py
from rest_framework import serializers
from .models import Store


class StoreCardSerializer(serializers.ModelSerializer):
    """Directory card on the contractors list."""

    class Meta:
        model = Store
        fields = [
            'id',
            'name',
            'description',
            'address',
            'service_areas',
            'categories',
            'logo_url',
            'cover_url',
            'updated_at',
        ]


class StoreDetailSerializer(serializers.ModelSerializer):
    owner_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Store
        fields = [
            'id',
            'owner_id',
            'name',
            'description',
            'phone',
            'address',
            'service_areas',
            'categories',
            'logo_url',
            'cover_url',
            'is_published',
            'created_at',
            'updated_at',
        ]


class StoreWriteSerializer(serializers.ModelSerializer):
    service_areas = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False
    )
    categories = serializers.ListField(
        child=serializers.CharField(max_length=50), required=False
    )

    class Meta:
        model = Store
        fields = [
            'name',
            'description',
            'phone',
            'address',
            'service_areas',
            'categories',
            'logo_url',
            'cover_url',
            'is_published',
        ]

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Store name is required")
        return value
