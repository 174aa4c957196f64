"""
Lookup tables used to turn a rule into an ORM predicate.

FIELD_COERCIONS maps the attribute names the frontend sends to the
Customer column and the parser for its semantic type. OPERATORS maps the
comparison symbols to Django field lookups.
"""
import math
from datetime import date, datetime, timezone as dt_timezone
from typing import Any, Callable, NamedTuple

from django.db.models import Q
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .exceptions import CoercionError, UnsupportedFieldError, UnsupportedOperatorError


def parse_number(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("number must be finite")
    return number


def parse_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not integers")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            return int(value)
        except ValueError:
            pass
    number = parse_number(value)
    if not number.is_integer():
        raise ValueError("number must be integral")
    return int(number)


def parse_timestamp(value: Any) -> datetime:
    if isinstance(value, bool):
        raise TypeError("booleans are not dates")
    if isinstance(value, (int, float)):
        # epoch milliseconds, as browsers send Date.getTime()
        parsed = datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)
    elif isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is None:
                raise ValueError("not an ISO 8601 date")
            parsed = datetime(day.year, day.month, day.day)
    else:
        raise TypeError(f"unsupported date value {type(value).__name__}")

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, dt_timezone.utc)
    # offsets near the calendar edges overflow here, not in the db adapter
    return parsed.astimezone(dt_timezone.utc)


class FieldSpec(NamedTuple):
    column: str
    parse: Callable[[Any], Any]
    kind: str


FIELD_COERCIONS = {
    'totalSpend': FieldSpec('total_spend', parse_number, 'number'),
    'numVisits': FieldSpec('num_visits', parse_integer, 'integer'),
    'lastVisitDate': FieldSpec('last_visit_date', parse_timestamp, 'date'),
}


class Comparator(NamedTuple):
    lookup: str
    negated: bool = False

    def predicate(self, column: str, value: Any) -> Q:
        q = Q(**{f"{column}__{self.lookup}": value})
        return ~q if self.negated else q


OPERATORS = {
    '>': Comparator('gt'),
    '>=': Comparator('gte'),
    '<': Comparator('lt'),
    '<=': Comparator('lte'),
    '=': Comparator('exact'),
    '!=': Comparator('exact', negated=True),
}


def get_comparator(symbol) -> Comparator:
    try:
        return OPERATORS[symbol]
    except (KeyError, TypeError):
        raise UnsupportedOperatorError(symbol)


def coerce_value(field, value):
    """Return (column, parsed value) for a rule's field and raw value."""
    try:
        spec = FIELD_COERCIONS[field]
    except (KeyError, TypeError):
        raise UnsupportedFieldError(field)

    try:
        return spec.column, spec.parse(value)
    except (TypeError, ValueError, OverflowError, OSError):
        raise CoercionError(field, value, spec.kind)
