"""
Core app URL configuration for the ingestion trigger.
"""

from django.urls import path

from apps.core.views import TriggerIngestionView

urlpatterns = [
    path(
        'ingest-emis',
        TriggerIngestionView.as_view(),
        name='ingest-emis',
    ),
]
