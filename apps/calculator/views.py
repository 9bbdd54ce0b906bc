"""
Calculator views.

Views are thin — all calculation logic is in the service layer.
"""

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.calculator.serializers import (
    AmortizationScheduleRequestSerializer,
    AmortizationScheduleSerializer,
    DiscountRequestSerializer,
    DiscountResultSerializer,
    LoanCalculationSerializer,
    LoanResultSerializer,
)
from apps.calculator.services import CalculatorService

logger = logging.getLogger(__name__)


class LoanCalculationView(APIView):
    """
    POST /api/calculate

    Solve for EMI, interest rate, loan term or borrowable amount,
    depending on calculation_type.
    """

    def post(self, request):
        """Handle a loan calculation."""
        serializer = LoanCalculationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = CalculatorService.calculate(serializer.validated_data)

        return Response(
            LoanResultSerializer(result).data,
            status=status.HTTP_200_OK,
        )


class AmortizationScheduleView(APIView):
    """
    POST /api/amortization-schedule

    Month-by-month breakdown of a loan into principal and interest.
    """

    def post(self, request):
        serializer = AmortizationScheduleRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        schedule = CalculatorService.schedule(serializer.validated_data)

        return Response(
            AmortizationScheduleSerializer(schedule).data,
            status=status.HTTP_200_OK,
        )


class DiscountView(APIView):
    """
    POST /api/discount

    Final price and savings after a percentage discount.
    """

    def post(self, request):
        serializer = DiscountRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = CalculatorService.discount(serializer.validated_data)

        return Response(
            DiscountResultSerializer(result).data,
            status=status.HTTP_200_OK,
        )
