from datetime import datetime, timezone as dt_timezone
from itertools import permutations

from django.test import TestCase

from apps.audiences.compiler import compile_rules
from apps.audiences.exceptions import (
    AudienceValidationError,
    RuleSetError,
    UnsupportedFieldError,
    UnsupportedOperatorError,
)
from apps.audiences.resolver import count_audience, preview_audience_size, resolve_audience, resolve_rules
from apps.customers.models import Customer


def rule(field, operator, value):
    return {'field': field, 'operator': operator, 'value': value}


class SpecExampleTest(TestCase):
    def setUp(self):
        Customer.objects.create(name='A', email='a@example.com', total_spend=500)
        Customer.objects.create(name='B', email='b@example.com', total_spend=50)

    def test_big_spenders(self):
        query = compile_rules([rule('totalSpend', '>', '100')], 'AND')
        audience = resolve_audience(query)
        self.assertEqual(audience, [{'name': 'A', 'email': 'a@example.com'}])
        self.assertEqual(count_audience(query), 1)


class RuleCompilerTest(TestCase):
    def setUp(self):
        Customer.objects.create(
            name='Ana', email='ana@example.com', total_spend=500, num_visits=10,
            last_visit_date=datetime(2024, 6, 1, tzinfo=dt_timezone.utc),
        )
        Customer.objects.create(
            name='Beto', email='beto@example.com', total_spend=50, num_visits=2,
            last_visit_date=datetime(2023, 1, 1, tzinfo=dt_timezone.utc),
        )
        Customer.objects.create(
            name='Caro', email='caro@example.com', total_spend=150, num_visits=0,
            last_visit_date=None,
        )
        self.rules = [
            rule('totalSpend', '>', '100'),
            rule('numVisits', '>=', '5'),
            rule('lastVisitDate', '>=', '2024-01-01'),
        ]

    def emails(self, rules, logical_operator):
        return {member['email'] for member in resolve_rules(rules, logical_operator)}

    def test_and_requires_every_rule(self):
        self.assertEqual(self.emails(self.rules, 'AND'), {'ana@example.com'})

    def test_or_accepts_any_rule(self):
        self.assertEqual(self.emails(self.rules, 'OR'), {'ana@example.com', 'caro@example.com'})

    def test_and_audience_is_subset_of_or_audience(self):
        for size in range(1, len(self.rules) + 1):
            rules = self.rules[:size]
            with self.subTest(rules=rules):
                self.assertLessEqual(self.emails(rules, 'AND'), self.emails(rules, 'OR'))

    def test_rule_order_does_not_matter(self):
        for logical_operator in ('AND', 'OR'):
            expected = self.emails(self.rules, logical_operator)
            for ordering in permutations(self.rules):
                self.assertEqual(self.emails(list(ordering), logical_operator), expected)

    def test_not_equal_keeps_customers_without_value(self):
        emails = self.emails([rule('lastVisitDate', '!=', '2024-06-01')], 'AND')
        self.assertEqual(emails, {'beto@example.com', 'caro@example.com'})

    def test_equal_on_integer_field(self):
        self.assertEqual(self.emails([rule('numVisits', '=', 2)], 'AND'), {'beto@example.com'})

    def test_audience_only_exposes_name_and_email(self):
        audience = resolve_rules([rule('totalSpend', '>=', 0)], 'OR')
        self.assertEqual([sorted(member) for member in audience], [['email', 'name']] * 3)
        self.assertEqual([m['name'] for m in audience], ['Ana', 'Beto', 'Caro'])

    def test_count_matches_resolved_length(self):
        for logical_operator in ('AND', 'OR'):
            query = compile_rules(self.rules, logical_operator)
            self.assertEqual(count_audience(query), len(resolve_audience(query)))

    def test_preview_is_idempotent_and_consistent(self):
        payload = {'rules': self.rules, 'logicalOperator': 'OR'}
        sizes = {preview_audience_size(payload) for _ in range(3)}
        self.assertEqual(sizes, {len(resolve_rules(self.rules, 'OR'))})

    def test_preview_does_not_write(self):
        before = Customer.objects.count()
        preview_audience_size({'rules': self.rules, 'logicalOperator': 'AND'})
        self.assertEqual(Customer.objects.count(), before)

    def test_unknown_operator(self):
        with self.assertRaises(UnsupportedOperatorError):
            compile_rules([rule('totalSpend', '~=', '100')], 'AND')

    def test_unknown_field(self):
        with self.assertRaises(UnsupportedFieldError):
            compile_rules([rule('nickname', '=', 'bob')], 'OR')

    def test_all_broken_rules_are_reported(self):
        rules = [
            rule('nickname', '=', 'bob'),
            rule('totalSpend', '~=', '100'),
            rule('numVisits', '>', 'many'),
            rule('totalSpend', '>', '1'),
        ]
        with self.assertRaises(RuleSetError) as ctx:
            compile_rules(rules, 'AND')

        message = str(ctx.exception)
        self.assertIn('Unsupported field: nickname', message)
        self.assertIn('Unsupported operator: ~=', message)
        self.assertIn('Invalid value for numVisits', message)
        self.assertEqual(len(ctx.exception.errors), 3)

    def test_empty_rule_set_is_rejected(self):
        with self.assertRaises(AudienceValidationError):
            compile_rules([], 'AND')

    def test_unknown_logical_operator_is_rejected(self):
        with self.assertRaises(AudienceValidationError):
            compile_rules(self.rules, 'XOR')
