from collections import Counter

from rest_framework import serializers

from minicrm.serializers import CamelCaseFieldsMixin
from .models import Campaign, DeliveryReceipt, DeliveryStatus


class CampaignSerializer(CamelCaseFieldsMixin, serializers.ModelSerializer):
    delivery = serializers.SerializerMethodField()

    class Meta:
        model = Campaign
        fields = ('id', 'message', 'members', 'audience_size', 'rules', 'logical_operator', 'sent_at', 'delivery')
        read_only_fields = fields

    def get_delivery(self, obj) -> dict:
        # list_campaigns() annotations avoid one query per row
        if hasattr(obj, 'sent_count'):
            return {'sent': obj.sent_count, 'failed': obj.failed_count}
        counts = Counter(obj.receipts.values_list('status', flat=True))
        return {'sent': counts[DeliveryStatus.SENT], 'failed': counts[DeliveryStatus.FAILED]}


class DeliveryReceiptSerializer(CamelCaseFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = DeliveryReceipt
        fields = ('id', 'name', 'email', 'status', 'delivered_at')
        read_only_fields = fields
