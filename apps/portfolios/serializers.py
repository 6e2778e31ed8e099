# apps/portfolios/serializers.py
from django.db import transaction
from rest_framework import serializers

from apps.stores.models import Store
from .models import Portfolio, PortfolioImage


PORTFOLIO_FIELDS = [
    'project_title',
    'type',
    'area',
    'location',
    'style',
    'duration',
    'personnel',
    'tags',
    'content',
    'cover_url',
    'published',
]


# Grid card on storefronts and the owner's portfolio list
class PortfolioCardSerializer(serializers.ModelSerializer):
    class Meta:
        model = Portfolio
        fields = ['id', 'project_title', 'cover_url', 'tags', 'published', 'created_at']


class PortfolioImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = PortfolioImage
        fields = ['url', 'sort_order']


class PortfolioDetailSerializer(serializers.ModelSerializer):
    store_id = serializers.IntegerField(read_only=True)
    store_name = serializers.CharField(source='store.name', read_only=True)
    owner_id = serializers.IntegerField(source='store.owner_id', read_only=True)
    images = PortfolioImageSerializer(many=True, read_only=True)

    class Meta:
        model = Portfolio
        fields = ['id', 'store_id', 'store_name', 'owner_id'] + PORTFOLIO_FIELDS + [
            'images', 'created_at', 'updated_at'
        ]


class PortfolioWriteSerializer(serializers.ModelSerializer):
    """Create (store_id required) and partial update of a portfolio.

    ``images`` is an ordered list of already uploaded URLs; on update it
    replaces the existing gallery when given.
    """
    store_id = serializers.PrimaryKeyRelatedField(
        source='store', queryset=Store.objects.all()
    )
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    images = serializers.ListField(child=serializers.URLField(max_length=500), required=False, write_only=True)

    class Meta:
        model = Portfolio
        fields = ['store_id'] + PORTFOLIO_FIELDS + ['images']

    def validate_project_title(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Project title is required")
        return value

    def validate_store_id(self, store):
        if self.instance is not None and store.id != self.instance.store_id:
            raise serializers.ValidationError("A portfolio cannot move to another store")
        return store

    def _save_images(self, portfolio, urls):
        PortfolioImage.objects.filter(portfolio=portfolio).delete()
        PortfolioImage.objects.bulk_create([
            PortfolioImage(portfolio=portfolio, url=url, sort_order=idx)
            for idx, url in enumerate(urls)
        ])

    @transaction.atomic
    def create(self, validated_data):
        images = validated_data.pop('images', [])
        portfolio = Portfolio.objects.create(**validated_data)
        if images:
            self._save_images(portfolio, images)
        return portfolio

    @transaction.atomic
    def update(self, instance, validated_data):
        images = validated_data.pop('images', None)
        portfolio = super().update(instance, validated_data)
        if images is not None:
            self._save_images(portfolio, images)
        return portfolio
