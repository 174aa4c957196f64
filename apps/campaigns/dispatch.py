import logging
from typing import NamedTuple, Optional

from celery.result import AsyncResult
from django.db import DatabaseError

from apps.audiences.exceptions import StoreError
from apps.audiences.resolver import resolve_rules
from apps.audiences.serializers import CampaignRequestSerializer, validate_request
from tasks.delivery import simulate_campaign_delivery
from .models import Campaign

logger = logging.getLogger(__name__)


class Dispatch(NamedTuple):
    campaign: Campaign
    # None when the simulation could not be queued
    delivery: Optional[AsyncResult]


def dispatch_campaign(members, message, rules, logical_operator) -> Dispatch:
    """Persist the campaign record, then queue the delivery simulation.

    The record is written before the simulation is queued and is never
    touched again, whatever happens to the simulation.
    """
    try:
        campaign = Campaign.objects.create(
            message=message,
            members=[{'name': m['name'], 'email': m['email']} for m in members],
            audience_size=len(members),
            rules=[dict(rule) for rule in rules],
            logical_operator=logical_operator,
        )
    except DatabaseError as e:
        logger.error(f"Could not store campaign: {e}")
        raise StoreError(f"Could not store campaign: {e}")

    logger.info(f"Campaign {campaign.pk} created for {campaign.audience_size} recipients")
    return Dispatch(campaign=campaign, delivery=start_delivery(campaign))


def start_delivery(campaign) -> Optional[AsyncResult]:
    try:
        return simulate_campaign_delivery.delay(campaign.pk)
    except Exception as e:
        logger.error(f"Could not queue delivery for campaign {campaign.pk}: {e}")
        return None


def create_campaign(payload) -> Dispatch:
    """Validate a create-audience request, resolve its audience and dispatch."""
    data = validate_request(CampaignRequestSerializer, payload)
    members = resolve_rules(data['rules'], data['logical_operator'])
    return dispatch_campaign(
        members,
        data['message'],
        rules=data['rules'],
        logical_operator=data['logical_operator'],
    )


def list_campaigns():
    """All campaigns, most recently sent first."""
    return Campaign.objects.order_by('-sent_at', '-id')
