import logging

from django.db import DatabaseError

from apps.customers.models import Customer
from .compiler import compile_rules
from .exceptions import StoreError
from .serializers import AudienceQuerySerializer, validate_request

logger = logging.getLogger(__name__)

AUDIENCE_FIELDS = ('name', 'email')


def resolve_audience(query):
    """Customers matching ``query`` projected to ``{name, email}``, by id."""
    try:
        return list(
            Customer.objects.filter(query)
            .order_by('id')
            .values(*AUDIENCE_FIELDS)
        )
    except DatabaseError as e:
        logger.error(f"Customer store query failed: {e}")
        raise StoreError(f"Customer store query failed: {e}")


def count_audience(query):
    try:
        return Customer.objects.filter(query).count()
    except DatabaseError as e:
        logger.error(f"Customer store count failed: {e}")
        raise StoreError(f"Customer store query failed: {e}")


def resolve_rules(rules, logical_operator):
    return resolve_audience(compile_rules(rules, logical_operator))


def preview_audience_size(payload):
    """Validate a rule set and count its audience without persisting anything."""
    data = validate_request(AudienceQuerySerializer, payload)
    query = compile_rules(data['rules'], data['logical_operator'])
    size = count_audience(query)
    logger.info(f"Audience preview: {size} customers match {len(data['rules'])} rules ({data['logical_operator']})")
    return size
