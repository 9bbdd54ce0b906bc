"""
EMI tracker views.

Views are thin — all business logic is in the service layer.
"""

import logging

from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.utils import error_payload
from apps.emis.models import EMI
from apps.emis.serializers import (
    EMIResponseSerializer,
    EMISerializer,
    EMISummarySerializer,
)
from apps.emis.services import EMIService

logger = logging.getLogger(__name__)


def _emi_response_data(emi: EMI) -> dict:
    """Validated response payload for a single EMI."""
    response_data = {
        'id': emi.pk,
        'name': emi.name,
        'loan_type': emi.loan_type,
        'total_amount': emi.total_amount,
        'emi_amount': emi.emi_amount,
        'interest_rate': emi.interest_rate,
        'total_installments': emi.total_installments,
        'paid_installments': emi.paid_installments,
        'installments_left': emi.installments_left,
        'start_date': emi.start_date,
        'next_payment_date': emi.next_payment_date,
        'status': emi.status,
        'remaining_amount': emi.remaining_amount,
        'progress_percentage': emi.progress_percentage,
    }

    serializer = EMIResponseSerializer(data=response_data)
    serializer.is_valid(raise_exception=True)
    return serializer.data


class EMIPagination(PageNumberPagination):
    """Pagination for the EMI list."""
    page_size = 10
    page_size_query_param = 'page_size'
    max_page_size = 100


class EMIListView(APIView):
    """
    GET /api/emis
    POST /api/emis

    List tracked EMIs (optionally ?status=active|completed|overdue),
    or start tracking a new one.
    """

    def get(self, request):
        """Handle listing EMIs, soonest due first."""
        status_filter = request.query_params.get('status')
        if status_filter and status_filter not in EMI.Status.values:
            return Response(
                error_payload(status.HTTP_400_BAD_REQUEST, {
                    'status': [
                        f"Must be one of {', '.join(EMI.Status.values)}."
                    ],
                }),
                status=status.HTTP_400_BAD_REQUEST,
            )

        emis = EMIService.list_emis(status=status_filter)

        paginator = EMIPagination()
        page = paginator.paginate_queryset(emis, request, view=self)
        response_data = [_emi_response_data(emi) for emi in page]

        return paginator.get_paginated_response(response_data)

    def post(self, request):
        """Handle creating an EMI."""
        serializer = EMISerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        emi = EMIService.create(serializer.validated_data)

        return Response(
            _emi_response_data(emi),
            status=status.HTTP_201_CREATED,
        )


class EMIDetailView(APIView):
    """
    GET /api/emis/<emi_id>
    PUT /api/emis/<emi_id>
    DELETE /api/emis/<emi_id>
    """

    def get(self, request, emi_id):
        """Handle viewing one EMI with its progress."""
        emi = EMIService.get_emi(emi_id)
        return Response(_emi_response_data(emi), status=status.HTTP_200_OK)

    def put(self, request, emi_id):
        """Handle editing an EMI."""
        serializer = EMISerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        emi = EMIService.update(emi_id, serializer.validated_data)

        return Response(_emi_response_data(emi), status=status.HTTP_200_OK)

    def delete(self, request, emi_id):
        """Handle deleting an EMI."""
        EMIService.delete(emi_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MarkEMIPaidView(APIView):
    """
    POST /api/emis/<emi_id>/mark-paid

    Record one installment payment.
    """

    def post(self, request, emi_id):
        emi = EMIService.mark_paid(emi_id)
        return Response(_emi_response_data(emi), status=status.HTTP_200_OK)


class EMISummaryView(APIView):
    """
    GET /api/emis/summary

    Amounts paid and pending, and EMI counts per status.
    """

    def get(self, request):
        serializer = EMISummarySerializer(data=EMIService.summary())
        serializer.is_valid(raise_exception=True)

        return Response(serializer.data, status=status.HTTP_200_OK)
