import logging

from django.db import DatabaseError
from django.db.models import Count, Q
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.audiences.exceptions import AudienceError
from .dispatch import create_campaign, list_campaigns
from .models import DeliveryStatus
from .serializers import CampaignSerializer, DeliveryReceiptSerializer

logger = logging.getLogger(__name__)


class CampaignViewSet(mixins.ListModelMixin,
                      mixins.RetrieveModelMixin,
                      viewsets.GenericViewSet):
    permission_classes = [IsAuthenticated]
    serializer_class = CampaignSerializer

    def get_queryset(self):
        return list_campaigns().annotate(
            sent_count=Count('receipts', filter=Q(receipts__status=DeliveryStatus.SENT)),
            failed_count=Count('receipts', filter=Q(receipts__status=DeliveryStatus.FAILED)),
        )

    def create(self, request, *args, **kwargs):
        """Resolve the audience for a rule set and send the campaign"""
        try:
            dispatch = create_campaign(request.data)
        except AudienceError as e:
            logger.error(f"Error in create campaign: {e}")
            return Response({'error': str(e)}, status=e.status_code)

        serializer = self.get_serializer(dispatch.campaign)
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    def list(self, request, *args, **kwargs):
        try:
            return super().list(request, *args, **kwargs)
        except DatabaseError as e:
            logger.error(f"Error in list campaigns: {e}")
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    @action(detail=True, methods=['get'])
    def deliveries(self, request, pk=None):
        """Per-recipient delivery receipts of one campaign"""
        campaign = self.get_object()
        serializer = DeliveryReceiptSerializer(campaign.receipts.all(), many=True)
        return Response(serializer.data)
