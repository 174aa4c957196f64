from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.audiences.exceptions import StoreError
from apps.customers.models import Customer

User = get_user_model()


class CampaignAPITest(APITestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='operator', email='op@example.com', password='testpass123')
        self.client.force_authenticate(user=self.user)
        self.list_url = reverse('campaign-list')
        Customer.objects.create(name='A', email='a@example.com', total_spend=500, num_visits=3)
        Customer.objects.create(name='B', email='b@example.com', total_spend=50, num_visits=12)
        self.payload = {
            'rules': [{'field': 'totalSpend', 'operator': '>', 'value': '100'}],
            'message': 'Hi A, here is 10% off',
            'logicalOperator': 'AND',
        }

    def test_create_campaign(self):
        response = self.client.post(self.list_url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['members'], [{'name': 'A', 'email': 'a@example.com'}])
        self.assertEqual(response.data['audienceSize'], 1)
        self.assertEqual(response.data['message'], 'Hi A, here is 10% off')
        self.assertEqual(response.data['logicalOperator'], 'AND')
        self.assertEqual(response.data['rules'], self.payload['rules'])
        self.assertIn('sentAt', response.data)
        self.assertEqual(response.data['delivery'], {'sent': 1, 'failed': 0})

    def test_created_campaign_is_listed(self):
        created = self.client.post(self.list_url, self.payload, format='json')
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c['id'] for c in response.data], [created.data['id']])
        self.assertEqual(response.data[0]['delivery'], {'sent': 1, 'failed': 0})

    def test_list_is_most_recent_first(self):
        x = self.client.post(self.list_url, dict(self.payload, message='X'), format='json')
        y = self.client.post(self.list_url, dict(self.payload, message='Y'), format='json')
        response = self.client.get(self.list_url)
        self.assertEqual([c['id'] for c in response.data], [y.data['id'], x.data['id']])

    def test_invalid_request_reports_all_problems(self):
        response = self.client.post(self.list_url, {
            'rules': 'not-an-array',
            'message': 123,
            'logicalOperator': 'XOR',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        error = response.data['error']
        self.assertIn('Rules must be an array', error)
        self.assertIn('Message must be a string', error)
        self.assertIn('Logical operator must be either AND or OR', error)

    def test_unsupported_field(self):
        payload = dict(self.payload, rules=[{'field': 'nickname', 'operator': '=', 'value': 'A'}])
        response = self.client.post(self.list_url, payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, {'error': 'Unsupported field: nickname'})

    def test_bad_value(self):
        payload = dict(self.payload, rules=[{'field': 'lastVisitDate', 'operator': '>', 'value': 'yesterday-ish'}])
        response = self.client.post(self.list_url, payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Invalid value for lastVisitDate', response.data['error'])

    def test_store_failure_on_create(self):
        with mock.patch('apps.campaigns.dispatch.resolve_rules', side_effect=StoreError('store down')):
            response = self.client.post(self.list_url, self.payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'store down'})

    def test_store_failure_on_list(self):
        with mock.patch('apps.campaigns.views.list_campaigns', side_effect=DatabaseError('gone')):
            response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data, {'error': 'gone'})

    def test_retrieve_and_deliveries(self):
        created = self.client.post(self.list_url, dict(self.payload, logicalOperator='OR', rules=[
            {'field': 'totalSpend', 'operator': '>', 'value': 100},
            {'field': 'numVisits', 'operator': '>', 'value': 10},
        ]), format='json')
        campaign_id = created.data['id']

        detail = self.client.get(reverse('campaign-detail', args=[campaign_id]))
        self.assertEqual(detail.status_code, status.HTTP_200_OK)
        self.assertEqual(detail.data['audienceSize'], 2)

        deliveries = self.client.get(reverse('campaign-deliveries', args=[campaign_id]))
        self.assertEqual(deliveries.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(d['email'], d['status']) for d in deliveries.data],
            [('a@example.com', 'SENT'), ('b@example.com', 'SENT')],
        )
        self.assertIn('deliveredAt', deliveries.data[0])

    def test_campaigns_cannot_be_edited(self):
        created = self.client.post(self.list_url, self.payload, format='json')
        url = reverse('campaign-detail', args=[created.data['id']])
        self.assertEqual(self.client.patch(url, {'message': 'x'}, format='json').status_code,
                         status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        self.assertEqual(self.client.get(self.list_url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.post(self.list_url, self.payload, format='json').status_code,
                         status.HTTP_403_FORBIDDEN)
