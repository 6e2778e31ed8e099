# apps/uploads/views.py
import logging

from cloudinary.exceptions import Error as CloudinaryError
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from .storage import clean_folder, upload_file

logger = logging.getLogger(__name__)


class UploadImageView(APIView):
    """Proxy a single multipart file to object storage.

    The response carries both ``url`` and the ``result`` list that rich-text
    editors expect from an image upload endpoint.
    """
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]
    default_folder = 'misc'

    def post(self, request):
        # Whatever the field name (file, image, files[]), take the first file
        file = next(iter(request.FILES.values()), None)
        if file is None:
            return Response({"error": "file is required"}, status=status.HTTP_400_BAD_REQUEST)

        folder = clean_folder(request.query_params.get('folder'), self.default_folder)

        try:
            url = upload_file(file, folder)
        except CloudinaryError as e:
            logger.error("Upload failed for user %s: %s", request.user.id, e)
            return Response({"error": str(e) or "upload failed"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response({
            "url": url,
            "result": [{"url": url, "name": file.name, "size": file.size}],
        })
