from datetime import datetime, timezone as dt_timezone

from django.db.models import Q
from django.test import SimpleTestCase

from apps.audiences.exceptions import CoercionError, UnsupportedFieldError, UnsupportedOperatorError
from apps.audiences.rules import OPERATORS, coerce_value, get_comparator


class FieldCoercionTest(SimpleTestCase):
    def test_total_spend_parses_as_float(self):
        self.assertEqual(coerce_value('totalSpend', '100'), ('total_spend', 100.0))
        self.assertEqual(coerce_value('totalSpend', 12), ('total_spend', 12.0))
        self.assertEqual(coerce_value('totalSpend', ' 99.5 '), ('total_spend', 99.5))

    def test_total_spend_rejects_garbage(self):
        for value in ['abc', '', 'nan', 'inf', None, True, [1]]:
            with self.subTest(value=value):
                with self.assertRaises(CoercionError):
                    coerce_value('totalSpend', value)

    def test_num_visits_parses_as_integer(self):
        self.assertEqual(coerce_value('numVisits', '7'), ('num_visits', 7))
        self.assertEqual(coerce_value('numVisits', 3), ('num_visits', 3))
        self.assertEqual(coerce_value('numVisits', 3.0), ('num_visits', 3))
        self.assertEqual(coerce_value('numVisits', '4.0'), ('num_visits', 4))

    def test_num_visits_rejects_fractions(self):
        for value in ['7.5', 2.25, 'seven', False]:
            with self.subTest(value=value):
                with self.assertRaises(CoercionError):
                    coerce_value('numVisits', value)

    def test_last_visit_date_parses_to_aware_datetime(self):
        column, value = coerce_value('lastVisitDate', '2024-01-15')
        self.assertEqual(column, 'last_visit_date')
        self.assertEqual(value, datetime(2024, 1, 15, tzinfo=dt_timezone.utc))

        _, value = coerce_value('lastVisitDate', '2024-01-15T10:30:00Z')
        self.assertEqual(value, datetime(2024, 1, 15, 10, 30, tzinfo=dt_timezone.utc))

    def test_last_visit_date_accepts_epoch_milliseconds(self):
        _, value = coerce_value('lastVisitDate', 86400000)
        self.assertEqual(value, datetime(1970, 1, 2, tzinfo=dt_timezone.utc))

    def test_last_visit_date_rejects_invalid_dates(self):
        for value in ['not-a-date', '2024-02-30', '', None]:
            with self.subTest(value=value):
                with self.assertRaises(CoercionError):
                    coerce_value('lastVisitDate', value)

    def test_last_visit_date_is_normalised_to_utc(self):
        _, value = coerce_value('lastVisitDate', '2024-01-15T10:30:00+02:00')
        self.assertEqual(value, datetime(2024, 1, 15, 8, 30, tzinfo=dt_timezone.utc))
        self.assertEqual(value.utcoffset().total_seconds(), 0)

    def test_last_visit_date_out_of_range(self):
        for value in ['9999-12-31T23:59:59-14:00', '0001-01-01T00:00:00+14:00']:
            with self.subTest(value=value):
                with self.assertRaises(CoercionError):
                    coerce_value('lastVisitDate', value)

    def test_coercion_error_names_field_and_type(self):
        with self.assertRaises(CoercionError) as ctx:
            coerce_value('totalSpend', 'lots')
        self.assertEqual(ctx.exception.field, 'totalSpend')
        self.assertIn('number', str(ctx.exception))

    def test_unknown_field(self):
        with self.assertRaises(UnsupportedFieldError) as ctx:
            coerce_value('nickname', 'bob')
        self.assertEqual(str(ctx.exception), 'Unsupported field: nickname')


class OperatorTableTest(SimpleTestCase):
    def test_known_symbols(self):
        self.assertEqual(set(OPERATORS), {'>', '>=', '<', '<=', '=', '!='})

    def test_predicates(self):
        self.assertEqual(get_comparator('>').predicate('total_spend', 10), Q(total_spend__gt=10))
        self.assertEqual(get_comparator('<=').predicate('num_visits', 2), Q(num_visits__lte=2))
        self.assertEqual(get_comparator('=').predicate('num_visits', 2), Q(num_visits__exact=2))
        self.assertEqual(get_comparator('!=').predicate('num_visits', 2), ~Q(num_visits__exact=2))

    def test_unknown_operator(self):
        with self.assertRaises(UnsupportedOperatorError) as ctx:
            get_comparator('~=')
        self.assertEqual(str(ctx.exception), 'Unsupported operator: ~=')
