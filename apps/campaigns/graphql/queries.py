import strawberry
from typing import List
from apps.audiences.resolver import preview_audience_size
from apps.campaigns.dispatch import list_campaigns
from apps.campaigns.models import Campaign
from minicrm.graphql.permissions import IsAuthenticated
from .types import CampaignType, RuleInput, rules_payload


@strawberry.type
class CampaignQueries:

    @strawberry.field(permission_classes=[IsAuthenticated])
    def campaigns(self) -> List[CampaignType]:
        return list_campaigns()

    @strawberry.field(permission_classes=[IsAuthenticated])
    def campaign(self, id: int) -> CampaignType:
        return Campaign.objects.get(id=id)

    @strawberry.field(permission_classes=[IsAuthenticated])
    def audience_size(self, rules: List[RuleInput], logical_operator: str) -> int:
        return preview_audience_size({
            'rules': rules_payload(rules),
            'logicalOperator': logical_operator,
        })
