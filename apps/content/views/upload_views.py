from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated

from apps.common.utils import success_response
from ..services import UploadService


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
def upload_file(request):
    """Store the multipart ``file`` field and return its public URL"""
    result = UploadService.store(request.FILES.get('file'), request.user)
    return success_response(result, status.HTTP_201_CREATED)
