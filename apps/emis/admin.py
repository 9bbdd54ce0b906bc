from django.contrib import admin

from apps.emis.models import EMI


@admin.register(EMI)
class EMIAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'name', 'loan_type', 'emi_amount',
        'paid_installments', 'total_installments',
        'next_payment_date', 'status',
    )
    list_filter = ('status', 'loan_type')
    search_fields = ('name', 'loan_type')
    readonly_fields = ('created_at', 'updated_at')
