from django.db import models


class Customer(models.Model):
    class Meta:
        app_label = 'customers'
        indexes = [
            models.Index(fields=['total_spend'], name='customer_total_spend_idx'),
            models.Index(fields=['last_visit_date'], name='customer_last_visit_idx'),
        ]

    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True)
    total_spend = models.FloatField(default=0)
    num_visits = models.PositiveIntegerField(default=0)
    last_visit_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.name} <{self.email}>"
