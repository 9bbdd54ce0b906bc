"""
API exceptions and the DRF exception handler.

Calculator failures arrive here as classified LoanCalculationError
instances; this is the only place they are turned into user-facing text.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from apps.calculator.exceptions import InvalidInputError, LoanCalculationError
from apps.core.utils import error_payload

logger = logging.getLogger(__name__)


class EMINotFoundError(APIException):
    """Raised when a tracked EMI does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'EMI not found.'
    default_code = 'emi_not_found'


class EMIAlreadyCompletedError(APIException):
    """Raised when paying an installment on a fully repaid EMI."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'All installments of this EMI are already paid.'
    default_code = 'emi_already_completed'


class BudgetNotFoundError(APIException):
    """Raised when a budget does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Budget not found.'
    default_code = 'budget_not_found'


class InvalidSpendError(APIException):
    """Raised when a spending entry would leave a budget out of bounds."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Spent amount must stay between 0 and the storage limit.'
    default_code = 'invalid_spend'


class DataIngestionError(Exception):
    """Raised when data ingestion fails."""

    pass


FIELD_LABELS = {
    'principal': 'loan amount',
    'annual_rate_percent': 'interest rate',
    'term_years': 'loan term',
    'emi': 'monthly EMI',
    'original_price': 'original price',
    'discount_percent': 'discount percentage',
    'calculation_type': 'calculation type',
}

CALCULATION_ERROR_MESSAGES = {
    'infeasible_emi': (
        'This EMI is too low to repay the loan amount within the term, '
        'even at 0% interest.'
    ),
    'rate_out_of_range': (
        'This EMI would need an interest rate above 100% per year.'
    ),
    'term_out_of_range': (
        'This EMI would take more than 30 years to repay the loan.'
    ),
    'non_amortizing_emi': (
        'This EMI does not cover the monthly interest, so the loan '
        'would never be repaid.'
    ),
    'convergence_error': (
        'The calculation did not converge. Please check the values.'
    ),
}


def calculation_error_response(exc: LoanCalculationError) -> Response:
    """Translate a classified calculator failure into an API response."""
    if isinstance(exc, InvalidInputError):
        label = FIELD_LABELS.get(exc.field, exc.field)
        return Response(
            error_payload(
                status.HTTP_400_BAD_REQUEST,
                f"Please enter a valid {label}: {exc.reason}.",
                code=exc.code,
                field=exc.field,
            ),
            status=status.HTTP_400_BAD_REQUEST,
        )

    detail = CALCULATION_ERROR_MESSAGES.get(
        exc.code, 'The loan could not be calculated.',
    )
    return Response(
        error_payload(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail,
            code=exc.code,
        ),
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


def custom_exception_handler(exc, context):
    """
    Custom DRF exception handler that returns consistent error responses.

    Handles DRF exceptions and calculator errors, and logs anything else
    as a server error.
    """
    if isinstance(exc, LoanCalculationError):
        return calculation_error_response(exc)

    response = exception_handler(exc, context)

    if response is not None:
        response.data = error_payload(response.status_code, response.data)
    else:
        # Unhandled exceptions — log and return 500
        logger.exception(
            "Unhandled exception in %s",
            context.get('view', 'unknown'),
            exc_info=exc,
        )
        response = Response(
            error_payload(
                500,
                'An unexpected error occurred. Please try again later.',
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return response
