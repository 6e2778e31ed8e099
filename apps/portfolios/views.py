# apps/portfolios/views.py
import logging

from rest_framework import generics, permissions, status
from rest_framework.response import Response

from apps.stores.models import Store
from apps.users.permissions import can_manage_store
from .models import Portfolio
from .serializers import (
    PortfolioCardSerializer,
    PortfolioDetailSerializer,
    PortfolioWriteSerializer,
)

logger = logging.getLogger(__name__)


def _denied(message="You do not have permission for this portfolio"):
    return Response({"success": False, "message": message}, status=status.HTTP_403_FORBIDDEN)


def _not_found():
    return Response({"success": False, "message": "Portfolio not found"}, status=status.HTTP_404_NOT_FOUND)


# 1. Store portfolios (list) + create
class PortfolioListCreateView(generics.GenericAPIView):
    serializer_class = PortfolioWriteSerializer

    def get_permissions(self):
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get(self, request):
        store_id = request.query_params.get('store')
        if not store_id:
            return Response({"success": False, "message": "store is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            store = Store.objects.get(id=store_id)
        except (Store.DoesNotExist, ValueError):
            return Response({"success": False, "message": "Store not found"}, status=status.HTTP_404_NOT_FOUND)

        portfolios = Portfolio.objects.filter(store=store)
        if not can_manage_store(request.user, store):
            portfolios = portfolios.filter(published=True)

        return Response({
            "success": True,
            "store_id": store.id,
            "portfolios": PortfolioCardSerializer(portfolios.order_by('-created_at'), many=True).data
        })

    def post(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        store = serializer.validated_data['store']
        if store.owner_id != request.user.id:
            return _denied("You can only add portfolios to your own store")

        portfolio = serializer.save()
        logger.info("Portfolio %s created for store %s", portfolio.id, store.id)

        return Response({
            "success": True,
            "id": portfolio.id,
            "portfolio": PortfolioDetailSerializer(portfolio).data
        }, status=status.HTTP_201_CREATED)


# 2. Detail / edit / delete
class PortfolioDetailView(generics.GenericAPIView):
    serializer_class = PortfolioWriteSerializer

    def get_permissions(self):
        if self.request.method == 'GET':
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated()]

    def get_portfolio(self, portfolio_id):
        return (
            Portfolio.objects.select_related('store')
            .prefetch_related('images')
            .filter(id=portfolio_id)
            .first()
        )

    def get(self, request, portfolio_id):
        portfolio = self.get_portfolio(portfolio_id)
        if portfolio is None:
            return _not_found()
        if not portfolio.published and not can_manage_store(request.user, portfolio.store):
            return _not_found()

        return Response({
            "success": True,
            "portfolio": PortfolioDetailSerializer(portfolio).data
        })

    def patch(self, request, portfolio_id):
        portfolio = self.get_portfolio(portfolio_id)
        if portfolio is None:
            return _not_found()
        if not can_manage_store(request.user, portfolio.store):
            return _denied()

        serializer = self.get_serializer(portfolio, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        portfolio = serializer.save()
        logger.info("Portfolio %s updated by user %s", portfolio.id, request.user.id)

        return Response({
            "success": True,
            "portfolio": PortfolioDetailSerializer(self.get_portfolio(portfolio.id)).data
        })

    def delete(self, request, portfolio_id):
        portfolio = self.get_portfolio(portfolio_id)
        if portfolio is None:
            return _not_found()
        if not can_manage_store(request.user, portfolio.store):
            return _denied("You do not have permission to delete this portfolio")

        portfolio.delete()
        logger.info("Portfolio %s deleted by user %s", portfolio_id, request.user.id)

        return Response({"success": True})
