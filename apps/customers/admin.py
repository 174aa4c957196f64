from django.contrib import admin
from .models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'total_spend', 'num_visits', 'last_visit_date')
    search_fields = ('name', 'email')
