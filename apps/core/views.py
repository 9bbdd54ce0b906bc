"""
Core views: health probe and ingestion trigger.
"""

import logging

from django.http import JsonResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.tasks import ingest_emi_data

logger = logging.getLogger(__name__)


def health_check(request):
    """
    GET /health/

    Simple health check endpoint for Docker and load balancer probes.
    Exempt from API key authentication.
    """
    return JsonResponse({'status': 'healthy'}, status=200)


class TriggerIngestionView(APIView):
    """
    POST /api/ingest-emis

    Trigger background ingestion of tracked EMIs from
    the Excel file in DATA_DIR via Celery.
    """

    def post(self, request):
        """Trigger the EMI ingestion task."""
        task = ingest_emi_data.delay()

        logger.info("EMI data ingestion triggered — task=%s", task.id)

        return Response(
            {
                'message': 'EMI data ingestion has been triggered.',
                'task_id': task.id,
            },
            status=status.HTTP_202_ACCEPTED,
        )
