import operator
from functools import reduce

from django.db.models import Q

from .exceptions import AudienceValidationError, RuleError, RuleSetError
from .rules import coerce_value, get_comparator

LOGICAL_OPERATORS = {
    'AND': operator.and_,
    'OR': operator.or_,
}


def compile_rule(rule) -> Q:
    """One rule -> one predicate: ``column <op> coerced value``."""
    comparator = get_comparator(rule['operator'])
    column, value = coerce_value(rule['field'], rule['value'])
    return comparator.predicate(column, value)


def compile_each(rules):
    """Predicates of the rules that compile and the RuleErrors of those that don't."""
    predicates = []
    errors = []
    for rule in rules:
        try:
            predicates.append(compile_rule(rule))
        except RuleError as e:
            errors.append(e)
    return predicates, errors


def rule_errors(rules):
    return compile_each(rules)[1]


def compile_rules(rules, logical_operator) -> Q:
    """Combine the predicates of a flat rule list with AND or OR.

    Every rule is checked before failing so the caller sees all broken
    rules at once. A single broken rule raises its own error type.
    """
    try:
        combine = LOGICAL_OPERATORS[logical_operator]
    except (KeyError, TypeError):
        raise AudienceValidationError("Logical operator must be either AND or OR")
    if not rules:
        raise AudienceValidationError("Rules must not be empty")

    predicates, errors = compile_each(rules)
    if len(errors) == 1:
        raise errors[0]
    if errors:
        raise RuleSetError(errors)

    return reduce(combine, predicates)
