import strawberry
import strawberry_django
from typing import List
from strawberry import auto
from strawberry.scalars import JSON
from apps.campaigns.models import Campaign, DeliveryReceipt


@strawberry_django.type(DeliveryReceipt)
class DeliveryReceiptType:
    id: auto
    name: auto
    email: auto
    status: auto
    delivered_at: auto


@strawberry_django.type(Campaign)
class CampaignType:
    id: auto
    message: auto
    members: JSON
    audience_size: auto
    rules: JSON
    logical_operator: auto
    sent_at: auto
    receipts: List[DeliveryReceiptType]


@strawberry.input
class RuleInput:
    field: str
    operator: str
    value: JSON


def rules_payload(rules: List[RuleInput]) -> list:
    return [{'field': r.field, 'operator': r.operator, 'value': r.value} for r in rules]
