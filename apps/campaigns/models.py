from django.db import models
from django.core.exceptions import ValidationError
from django.utils import timezone


class Campaign(models.Model):
    """Record of one message sent to a resolved audience.

    Written once by the dispatcher and never updated afterwards; delivery
    outcomes live in DeliveryReceipt rows.
    """

    class Meta:
        app_label = 'campaigns'
        ordering = ['-sent_at', '-id']
        indexes = [
            models.Index(fields=['sent_at'], name='campaign_sent_at_idx'),
        ]

    LOGICAL_OPERATOR_CHOICES = [
        ('AND', 'All rules match'),
        ('OR', 'Any rule matches'),
    ]

    message = models.TextField(blank=True)
    members = models.JSONField(default=list)  # [{"name": ..., "email": ...}]
    audience_size = models.PositiveIntegerField(default=0)
    rules = models.JSONField(default=list)
    logical_operator = models.CharField(max_length=3, choices=LOGICAL_OPERATOR_CHOICES)
    sent_at = models.DateTimeField(default=timezone.now)

    def clean(self):
        if self.audience_size != len(self.members):
            raise ValidationError("audience_size must equal the number of members")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError(f"Campaign {self.pk} was already sent and cannot be changed")
        self.clean()
        super().save(*args, **kwargs)

    def __str__(self):
        return f"Campaign {self.pk} ({self.audience_size} recipients)"


class DeliveryStatus(models.TextChoices):
    SENT = 'SENT', 'Sent'
    FAILED = 'FAILED', 'Failed'


class DeliveryReceipt(models.Model):
    class Meta:
        app_label = 'campaigns'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['campaign', 'email'],
                name='unique_receipt_per_recipient'
            )
        ]
        indexes = [
            models.Index(fields=['campaign', 'status'], name='receipt_campaign_status_idx'),
        ]

    campaign = models.ForeignKey(Campaign, on_delete=models.CASCADE, related_name='receipts')
    name = models.CharField(max_length=255, blank=True)
    email = models.EmailField()
    status = models.CharField(max_length=10, choices=DeliveryStatus.choices)
    delivered_at = models.DateTimeField(default=timezone.now)
