import strawberry
from typing import List
from apps.campaigns.dispatch import create_campaign
from minicrm.graphql.permissions import IsAuthenticated
from .types import CampaignType, RuleInput, rules_payload


@strawberry.input
class CampaignInput:
    rules: List[RuleInput]
    message: str
    logical_operator: str


@strawberry.type
class CampaignMutations:

    @strawberry.mutation(permission_classes=[IsAuthenticated])
    def create_campaign(self, input: CampaignInput) -> CampaignType:
        dispatch = create_campaign({
            'rules': rules_payload(input.rules),
            'message': input.message,
            'logicalOperator': input.logical_operator,
        })
        return dispatch.campaign
