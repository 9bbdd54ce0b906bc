"""
Calculator service layer.

Views delegate here; the service builds solver inputs from validated
request data, runs the pure calculator functions and logs the outcome.
"""

import logging

from apps.calculator.amortization import (
    AmortizationSchedule,
    LoanQuery,
    LoanResult,
    amortization_schedule,
)
from apps.calculator.discount import DiscountResult, compute_discount
from apps.calculator.exceptions import LoanCalculationError

logger = logging.getLogger(__name__)


class CalculatorService:
    """Service class for loan and discount calculations."""

    @staticmethod
    def calculate(validated_data: dict) -> LoanResult:
        """
        Run one loan calculation.

        Args:
            validated_data: Dict with calculation_type and the inputs that
                type requires (principal, annual_rate_percent, term_years, emi).

        Returns:
            The LoanResult of the selected solver.

        Raises:
            LoanCalculationError: Passed through unchanged for the API layer
                to translate.
        """
        query = LoanQuery(
            calculation_type=validated_data['calculation_type'],
            principal=validated_data.get('principal'),
            annual_rate_percent=validated_data.get('annual_rate_percent'),
            term_years=validated_data.get('term_years'),
            emi=validated_data.get('emi'),
        )

        try:
            result = query.solve()
        except LoanCalculationError as exc:
            logger.info(
                "Loan calculation (%s) rejected: %s (%s)",
                query.calculation_type,
                exc.code,
                exc,
            )
            raise

        logger.info(
            "Loan calculation (%s): principal=%.2f, emi=%.2f, "
            "total_payment=%.2f",
            result.calculation_type,
            result.principal,
            result.emi,
            result.total_payment,
        )
        return result

    @staticmethod
    def schedule(validated_data: dict) -> AmortizationSchedule:
        """Build the month-by-month amortization schedule of a loan."""
        result = amortization_schedule(
            validated_data['principal'],
            validated_data['annual_rate_percent'],
            validated_data['term_years'],
        )
        logger.info(
            "Amortization schedule: principal=%.2f, installments=%d",
            result.principal,
            len(result.rows),
        )
        return result

    @staticmethod
    def discount(validated_data: dict) -> DiscountResult:
        """Apply a percentage discount to a price."""
        return compute_discount(
            validated_data['original_price'],
            validated_data['discount_percent'],
        )
