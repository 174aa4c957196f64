import logging

from rest_framework import serializers

from minicrm.serializers import CamelCaseFieldsMixin, StrictCharField, flatten_errors
from .compiler import LOGICAL_OPERATORS, rule_errors
from .exceptions import AudienceValidationError

logger = logging.getLogger(__name__)


class LogicalOperatorField(StrictCharField):
    default_error_messages = {
        'blank': 'Logical operator must be either AND or OR',
        'invalid_choice': 'Logical operator must be either AND or OR',
    }

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if value not in LOGICAL_OPERATORS:
            self.fail('invalid_choice')
        return value


class RuleSerializer(serializers.Serializer):
    # Blank field/operator names are left to the compiler to reject
    field = StrictCharField(
        allow_blank=True,
        trim_whitespace=False,
        error_messages={
            'required': 'Each rule must have a field',
            'null': 'Field must be a string',
            'invalid': 'Field must be a string',
        },
    )
    operator = StrictCharField(
        allow_blank=True,
        trim_whitespace=False,
        error_messages={
            'required': 'Each rule must have an operator',
            'null': 'Operator must be a string',
            'invalid': 'Operator must be a string',
        },
    )
    value = serializers.JSONField(
        allow_null=True,
        error_messages={'required': 'Each rule must have a value'},
    )


class AudienceQuerySerializer(CamelCaseFieldsMixin, serializers.Serializer):
    """Shape of a rule set: ``{rules: [...], logicalOperator: "AND"|"OR"}``"""

    rules = serializers.ListField(
        child=RuleSerializer(error_messages={'invalid': 'Each rule must be an object'}),
        allow_empty=False,
        error_messages={
            'required': 'Rules must be an array',
            'null': 'Rules must be an array',
            'not_a_list': 'Rules must be an array',
            'empty': 'Rules must not be empty',
        },
    )
    logical_operator = LogicalOperatorField(
        trim_whitespace=False,
        error_messages={
            'required': 'Logical operator is required',
            'null': 'Logical operator must be a string',
            'invalid': 'Logical operator must be a string',
        },
    )


class CampaignRequestSerializer(AudienceQuerySerializer):
    """Rule set plus the message to send to the resolved audience."""

    message = StrictCharField(
        allow_blank=True,
        trim_whitespace=False,
        error_messages={
            'required': 'Message is required',
            'null': 'Message must be a string',
            'invalid': 'Message must be a string',
        },
    )


def validate_request(serializer_class, payload):
    """Run a request serializer and raise one error listing every violation.

    When the rule list itself is well formed the rules are also compiled,
    so bad rule values are reported next to the other field errors.
    Returns the validated data with snake_case keys.
    """
    serializer = serializer_class(data=payload)
    if not serializer.is_valid():
        messages = flatten_errors(serializer.errors)
        if 'rules' not in serializer.errors:
            for error in rule_errors(serializer.initial_data['rules']):
                if str(error) not in messages:
                    messages.append(str(error))
        logger.warning(f"Validation errors: {', '.join(messages)}")
        raise AudienceValidationError(messages)

    logger.info("Validation successful")
    return serializer.validated_data
