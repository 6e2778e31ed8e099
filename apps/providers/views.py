# apps/providers/views.py
import logging

from cloudinary.exceptions import Error as CloudinaryError
from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone
from rest_framework import generics, permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from apps.notifications.models import Notification
from apps.stores.models import Store
from apps.stores.serializers import StoreDetailSerializer
from apps.uploads.storage import upload_file
from apps.users.permissions import IsManager
from .models import ProviderApplication
from .serializers import ApplySerializer, ApplicationSerializer, ApplicantSerializer

logger = logging.getLogger(__name__)
User = get_user_model()


# ========================
# PROVIDER CONSOLE STATUS
# ========================
class ProviderStatusView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = request.user
        application = ProviderApplication.objects.filter(applicant=user).order_by('-created_at').first()
        store = Store.objects.filter(owner=user).first() if user.is_provider else None

        return Response({
            "success": True,
            "provider_status": user.provider_status,
            "provider_status_display": user.get_provider_status_display(),
            "can_apply": user.provider_status == User.PROVIDER_NONE and application is None,
            "application": ApplicationSerializer(application).data if application else None,
            "store": StoreDetailSerializer(store).data if store else None,
        })


# ========================
# APPLY AS CONTRACTOR
# ========================
class ApplyView(generics.GenericAPIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]
    serializer_class = ApplySerializer

    def post(self, request):
        user = request.user

        # Already a contractor / under review, or applied before
        if user.provider_status != User.PROVIDER_NONE:
            return Response({
                "success": False,
                "message": "You are already a contractor or your application is under review"
            }, status=status.HTTP_400_BAD_REQUEST)
        if ProviderApplication.objects.filter(applicant=user).exists():
            return Response({
                "success": False,
                "message": "You have already applied"
            }, status=status.HTTP_400_BAD_REQUEST)

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            business_reg_url = upload_file(data['business_reg_file'], f"business_reg/{user.id}")
        except CloudinaryError as e:
            logger.error("Business registration upload failed for user %s: %s", user.id, e)
            return Response({
                "success": False,
                "message": str(e) or "File upload failed"
            }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        with transaction.atomic():
            application = ProviderApplication.objects.create(
                applicant=user,
                business_reg=business_reg_url,
                portfolio=data['portfolio'],
                memo=data['memo'],
            )
            user.provider_status = User.PROVIDER_REVIEWING
            user.save(update_fields=['provider_status', 'updated_at'])

        logger.info("Provider application %s submitted by user %s", application.id, user.id)

        return Response({
            "success": True,
            "message": "Application submitted. We will contact you after review.",
            "application": ApplicationSerializer(application).data
        }, status=status.HTTP_201_CREATED)


# ========================
# MANAGER CONSOLE
# ========================
class ManageSummaryView(generics.GenericAPIView):
    permission_classes = [IsManager]

    def get(self, request):
        pending = ProviderApplication.objects.filter(status=ProviderApplication.STATUS_PENDING).count()
        return Response({"success": True, "pending_applications": pending})


class ApplicantListView(generics.ListAPIView):
    permission_classes = [IsManager]
    serializer_class = ApplicantSerializer

    def get_queryset(self):
        queryset = ProviderApplication.objects.filter(
            status=ProviderApplication.STATUS_PENDING
        ).select_related('applicant').order_by('created_at')

        search = (self.request.query_params.get('search') or '').strip()
        if search:
            queryset = queryset.filter(memo__icontains=search)
        return queryset


def _decide(request, application_id, approve):
    try:
        application = ProviderApplication.objects.select_related('applicant').get(
            id=application_id,
            status=ProviderApplication.STATUS_PENDING
        )
    except ProviderApplication.DoesNotExist:
        return Response({
            "success": False,
            "message": "Application not found or already processed"
        }, status=status.HTTP_404_NOT_FOUND)

    applicant = application.applicant

    with transaction.atomic():
        application.status = ProviderApplication.STATUS_APPROVED if approve else ProviderApplication.STATUS_REJECTED
        application.reviewed_at = timezone.now()
        application.reviewed_by = request.user
        application.save()

        applicant.provider_status = User.PROVIDER_APPROVED if approve else User.PROVIDER_REJECTED
        applicant.save(update_fields=['provider_status', 'updated_at'])

        Notification.notify(
            applicant,
            "Your contractor application was approved. You can now register your store."
            if approve else "Your contractor application was rejected.",
            kind='application',
        )

    logger.info(
        "Application %s %s by manager %s",
        application.id, "approved" if approve else "rejected", request.user.id
    )

    return Response({
        "success": True,
        "message": "Application approved" if approve else "Application rejected",
        "application_id": application.id,
        "status": application.status,
        "provider_status": applicant.provider_status
    }, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([IsManager])
def approve_application(request, application_id):
    """
    Manager approves → application status 1, applicant becomes a contractor
    """
    return _decide(request, application_id, approve=True)


@api_view(['POST'])
@permission_classes([IsManager])
def reject_application(request, application_id):
    """
    Manager rejects → application status 2, applicant marked rejected
    """
    return _decide(request, application_id, approve=False)
