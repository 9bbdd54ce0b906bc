"""
Calculator URL configuration.
"""

from django.urls import path

from apps.calculator.views import (
    AmortizationScheduleView,
    DiscountView,
    LoanCalculationView,
)

urlpatterns = [
    path('calculate', LoanCalculationView.as_view(), name='calculate'),
    path(
        'amortization-schedule',
        AmortizationScheduleView.as_view(),
        name='amortization-schedule',
    ),
    path('discount', DiscountView.as_view(), name='discount'),
]
