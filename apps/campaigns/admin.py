from django.contrib import admin
from .models import Campaign, DeliveryReceipt


class DeliveryReceiptInline(admin.TabularInline):
    model = DeliveryReceipt
    extra = 0
    can_delete = False
    readonly_fields = ('name', 'email', 'status', 'delivered_at')


@admin.register(Campaign)
class CampaignAdmin(admin.ModelAdmin):
    list_display = ('id', 'sent_at', 'audience_size', 'logical_operator')
    readonly_fields = ('message', 'members', 'audience_size', 'rules', 'logical_operator', 'sent_at')
    inlines = [DeliveryReceiptInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
