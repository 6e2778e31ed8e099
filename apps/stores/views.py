# apps/stores/views.py
import logging

from django.db.models import Q
from rest_framework import generics, permissions, status
from rest_framework.response import Response

from apps.portfolios.models import Portfolio
from apps.portfolios.serializers import PortfolioCardSerializer
from apps.users.permissions import can_manage_store
from .models import Store
from .serializers import StoreCardSerializer, StoreDetailSerializer, StoreWriteSerializer

logger = logging.getLogger(__name__)


# ========================================
# 1. CONTRACTOR DIRECTORY (search + category + pages)
# ========================================
class StoreDirectoryView(generics.ListAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = StoreCardSerializer

    def get_queryset(self):
        queryset = Store.objects.filter(is_published=True).order_by('-updated_at')

        keyword = (self.request.query_params.get('q') or '').strip()
        if keyword:
            queryset = queryset.filter(
                Q(name__icontains=keyword)
                | Q(description__icontains=keyword)
                | Q(address__icontains=keyword)
            )

        # JSON containment is not portable across backends, categories are
        # matched in Python after the SQL filters.
        category = (self.request.query_params.get('category') or '').strip()
        if category:
            return [store for store in queryset if store.has_category(category)]
        return queryset


# ========================================
# 2. STOREFRONT DETAIL + PUBLISHED PORTFOLIOS
# ========================================
class StoreDetailView(generics.GenericAPIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, store_id):
        try:
            store = Store.objects.select_related('owner').get(id=store_id)
        except Store.DoesNotExist:
            return Response({
                "success": False,
                "message": "Store not found"
            }, status=status.HTTP_404_NOT_FOUND)

        if not store.is_published and not can_manage_store(request.user, store):
            return Response({
                "success": False,
                "message": "Store not found"
            }, status=status.HTTP_404_NOT_FOUND)

        portfolios = Portfolio.objects.filter(store=store, published=True).order_by('-created_at')

        return Response({
            "success": True,
            "store": StoreDetailSerializer(store).data,
            "portfolios": PortfolioCardSerializer(portfolios, many=True).data
        })


# ========================================
# 3. MY STORE (owner console)
# ========================================
class MyStoreView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = StoreWriteSerializer

    def get(self, request):
        store = Store.objects.filter(owner=request.user).first()
        return Response({
            "success": True,
            "store": StoreDetailSerializer(store).data if store else None
        })

    def put(self, request):
        if not request.user.is_provider:
            return Response({
                "success": False,
                "message": "Only approved contractors can register a store"
            }, status=status.HTTP_403_FORBIDDEN)

        store = Store.objects.filter(owner=request.user).first()
        serializer = self.get_serializer(store, data=request.data)
        serializer.is_valid(raise_exception=True)
        created = store is None
        store = serializer.save(owner=request.user)

        logger.info("Store %s %s by user %s", store.id, "created" if created else "updated", request.user.id)

        return Response({
            "success": True,
            "message": "Store registered" if created else "Store updated",
            "store": StoreDetailSerializer(store).data
        }, status=status.HTTP_201_CREATED if created else status.HTTP_200_OK)
