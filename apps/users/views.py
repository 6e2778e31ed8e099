# apps/users/views.py
import logging

from rest_framework import generics, permissions
from rest_framework.response import Response

from .serializers import ProfileSerializer

logger = logging.getLogger(__name__)


class UserProfileView(generics.RetrieveUpdateAPIView):
    permission_classes = [permissions.IsAuthenticated]
    serializer_class = ProfileSerializer
    http_method_names = ['get', 'patch']

    def get_object(self):
        return self.request.user

    def retrieve(self, request, *args, **kwargs):
        return Response({
            "success": True,
            "profile": self.get_serializer(request.user).data
        })

    def partial_update(self, request, *args, **kwargs):
        serializer = self.get_serializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        logger.info("Profile updated for user %s", request.user.id)

        return Response({
            "success": True,
            "message": "Profile updated successfully",
            "profile": serializer.data
        })
