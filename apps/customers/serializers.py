from rest_framework import serializers
from minicrm.serializers import CamelCaseFieldsMixin
from .models import Customer


class CustomerSerializer(CamelCaseFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ('id', 'name', 'email', 'total_spend', 'num_visits', 'last_visit_date', 'created_at')
        read_only_fields = ('id', 'created_at')
