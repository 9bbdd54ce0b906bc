"""
Budget URL configuration.
"""

from django.urls import path

from apps.budgets.views import BudgetDetailView, BudgetListView, BudgetSpendView

urlpatterns = [
    path('budgets', BudgetListView.as_view(), name='budget-list'),
    path(
        'budgets/<int:budget_id>',
        BudgetDetailView.as_view(),
        name='budget-detail',
    ),
    path(
        'budgets/<int:budget_id>/spend',
        BudgetSpendView.as_view(),
        name='budget-spend',
    ),
]
