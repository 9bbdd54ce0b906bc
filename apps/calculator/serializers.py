"""
Calculator serializers.

Request serializers only parse the submitted form values and check that the
chosen calculation type has the inputs it needs. Domain checks (positive
amounts, feasible EMIs) belong to the solvers.
"""

from rest_framework import serializers

from apps.calculator.amortization import (
    CALCULATION_EMI,
    CALCULATION_TYPES,
    REQUIRED_FIELDS,
)

# Upper bounds on request values; results must fit the 2-dp decimal fields below
MAX_AMOUNT = 1e12
MAX_ANNUAL_RATE_PERCENT = 1000.0
MAX_TERM_YEARS = 100.0
MIN_TERM_YEARS = 1 / 12


def validate_positive_term(value):
    """
    Reject positive terms shorter than one month.

    Zero and negative terms are left for the solvers to classify.
    """
    if value is not None and 0 < value < MIN_TERM_YEARS:
        raise serializers.ValidationError(
            "Loan term must be at least one month."
        )
    return value


class LoanCalculationSerializer(serializers.Serializer):
    """Serializer for a loan calculator request."""

    calculation_type = serializers.ChoiceField(
        choices=CALCULATION_TYPES,
        default=CALCULATION_EMI,
        help_text="What to solve for: emi, rate, term or borrow.",
    )
    principal = serializers.FloatField(
        required=False,
        allow_null=True,
        max_value=MAX_AMOUNT,
        help_text="Loan amount.",
    )
    annual_rate_percent = serializers.FloatField(
        required=False,
        allow_null=True,
        max_value=MAX_ANNUAL_RATE_PERCENT,
        help_text="Annual interest rate (%).",
    )
    term_years = serializers.FloatField(
        required=False,
        allow_null=True,
        max_value=MAX_TERM_YEARS,
        help_text="Loan term in years.",
    )
    emi = serializers.FloatField(
        required=False,
        allow_null=True,
        max_value=MAX_AMOUNT,
        help_text="Monthly installment.",
    )

    def validate_term_years(self, value):
        return validate_positive_term(value)

    def validate(self, attrs):
        """Require the inputs of the chosen calculation type."""
        calculation_type = attrs['calculation_type']
        missing = {
            name: f"This field is required to calculate {calculation_type}."
            for name in REQUIRED_FIELDS[calculation_type]
            if attrs.get(name) is None
        }
        if missing:
            raise serializers.ValidationError(missing)
        return attrs


class LoanResultSerializer(serializers.Serializer):
    """Serializer for a loan calculator result."""

    calculation_type = serializers.CharField()
    principal = serializers.DecimalField(max_digits=20, decimal_places=2)
    emi = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_payment = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_interest = serializers.DecimalField(max_digits=20, decimal_places=2)
    interest_rate_percent = serializers.DecimalField(
        max_digits=10, decimal_places=4, allow_null=True,
    )
    term_years = serializers.FloatField(allow_null=True)
    term_months = serializers.IntegerField(allow_null=True)
    max_principal = serializers.DecimalField(
        max_digits=20, decimal_places=2, allow_null=True,
    )


class AmortizationScheduleRequestSerializer(serializers.Serializer):
    """Serializer for an amortization schedule request."""

    principal = serializers.FloatField(
        max_value=MAX_AMOUNT,
        help_text="Loan amount.",
    )
    annual_rate_percent = serializers.FloatField(
        max_value=MAX_ANNUAL_RATE_PERCENT,
        help_text="Annual interest rate (%).",
    )
    term_years = serializers.FloatField(help_text="Loan term in years.")

    def validate_term_years(self, value):
        return validate_positive_term(value)


class ScheduleRowSerializer(serializers.Serializer):
    month = serializers.IntegerField()
    payment = serializers.DecimalField(max_digits=20, decimal_places=2)
    principal_component = serializers.DecimalField(
        max_digits=20, decimal_places=2,
    )
    interest_component = serializers.DecimalField(
        max_digits=20, decimal_places=2,
    )
    balance = serializers.DecimalField(max_digits=20, decimal_places=2)


class AmortizationScheduleSerializer(serializers.Serializer):
    """Serializer for an amortization schedule response."""

    principal = serializers.DecimalField(max_digits=20, decimal_places=2)
    emi = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_payment = serializers.DecimalField(max_digits=20, decimal_places=2)
    total_interest = serializers.DecimalField(max_digits=20, decimal_places=2)
    rows = ScheduleRowSerializer(many=True)


class DiscountRequestSerializer(serializers.Serializer):
    """Serializer for a discount calculator request."""

    original_price = serializers.FloatField(
        max_value=MAX_AMOUNT,
        help_text="Price before discount.",
    )
    discount_percent = serializers.FloatField(help_text="Discount (%).")


class DiscountResultSerializer(serializers.Serializer):
    original_price = serializers.DecimalField(max_digits=20, decimal_places=2)
    discount_percent = serializers.DecimalField(
        max_digits=6, decimal_places=2,
    )
    saved_amount = serializers.DecimalField(max_digits=20, decimal_places=2)
    final_price = serializers.DecimalField(max_digits=20, decimal_places=2)
