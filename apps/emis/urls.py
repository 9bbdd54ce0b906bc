"""
EMI tracker URL configuration.
"""

from django.urls import path

from apps.emis.views import (
    EMIDetailView,
    EMIListView,
    EMISummaryView,
    MarkEMIPaidView,
)

urlpatterns = [
    path('emis', EMIListView.as_view(), name='emi-list'),
    path('emis/summary', EMISummaryView.as_view(), name='emi-summary'),
    path('emis/<int:emi_id>', EMIDetailView.as_view(), name='emi-detail'),
    path(
        'emis/<int:emi_id>/mark-paid',
        MarkEMIPaidView.as_view(),
        name='emi-mark-paid',
    ),
]
