from celery import shared_task
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)


@shared_task
def simulate_campaign_delivery(campaign_id):
    """Run the delivery simulator over a campaign's audience and store receipts"""
    from apps.campaigns.delivery import get_delivery_simulator
    from apps.campaigns.models import Campaign, DeliveryReceipt, DeliveryStatus

    campaign = Campaign.objects.get(pk=campaign_id)
    results = get_delivery_simulator().run(campaign)

    delivered_at = timezone.now()
    DeliveryReceipt.objects.bulk_create(
        [
            DeliveryReceipt(
                campaign=campaign,
                name=result.recipient.get('name') or '',
                email=result.recipient['email'],
                status=result.status,
                delivered_at=delivered_at,
            )
            for result in results
        ],
        ignore_conflicts=True,
    )

    sent = sum(1 for result in results if result.status == DeliveryStatus.SENT)
    failed = len(results) - sent

    logger.info(f"Campaign {campaign_id} delivery simulated: {sent} sent, {failed} failed")
    return {'campaign_id': campaign_id, 'sent': sent, 'failed': failed}
