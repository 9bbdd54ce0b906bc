from django.contrib import admin

from apps.budgets.models import Budget


@admin.register(Budget)
class BudgetAdmin(admin.ModelAdmin):
    list_display = ('id', 'category', 'period', 'amount', 'spent', 'start_date')
    list_filter = ('period',)
    search_fields = ('category', 'description')
    readonly_fields = ('created_at', 'updated_at')
