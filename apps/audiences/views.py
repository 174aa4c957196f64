import logging

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .exceptions import AudienceError
from .resolver import preview_audience_size

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def audience_size(request):
    """Count the customers a rule set would reach"""
    try:
        size = preview_audience_size(request.data)
        return Response({'audienceSize': size})
    except AudienceError as e:
        logger.error(f"Error in audience_size: {e}")
        return Response({'error': str(e)}, status=e.status_code)
