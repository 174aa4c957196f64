"""
Delivery simulators.

A simulator stands in for the messaging vendor: it decides, per
recipient, whether the campaign message was SENT or FAILED. The class
used by the delivery task comes from ``settings.CAMPAIGN_DELIVERY_SIMULATOR``
so a real vendor client can replace the simulation without touching the
dispatcher.
"""
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from .models import DeliveryStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryResult:
    recipient: Dict[str, str]
    status: str


class DeliverySimulator(ABC):
    @abstractmethod
    def deliver(self, campaign, member) -> str:
        """Return the DeliveryStatus for one audience member."""

    def run(self, campaign) -> List[DeliveryResult]:
        results = []
        for member in campaign.members:
            try:
                status = self.deliver(campaign, member)
            except Exception as e:
                logger.warning(f"Delivery to {member.get('email')} failed for campaign {campaign.pk}: {e}")
                status = DeliveryStatus.FAILED
            if status not in DeliveryStatus.values:
                logger.warning(f"Unknown delivery status {status!r} for {member.get('email')} in campaign {campaign.pk}")
                status = DeliveryStatus.FAILED
            results.append(DeliveryResult(recipient=member, status=status))
        return results


class RandomDeliverySimulator(DeliverySimulator):
    """SENT with probability ``success_rate``; stable for a campaign/recipient pair."""

    def __init__(self, success_rate=0.9):
        if not 0 <= success_rate <= 1:
            raise ImproperlyConfigured(f"success_rate must be between 0 and 1, got {success_rate}")
        self.success_rate = success_rate

    def deliver(self, campaign, member):
        rng = random.Random(f"{campaign.pk}:{member['email']}")
        if rng.random() < self.success_rate:
            return DeliveryStatus.SENT
        return DeliveryStatus.FAILED


def get_delivery_simulator() -> DeliverySimulator:
    simulator_class = import_string(settings.CAMPAIGN_DELIVERY_SIMULATOR)
    options = getattr(settings, 'CAMPAIGN_DELIVERY_OPTIONS', {})
    return simulator_class(**options)
