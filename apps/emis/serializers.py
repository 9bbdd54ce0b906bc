"""
EMI tracker serializers.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.emis.models import EMI


class EMISerializer(serializers.Serializer):
    """Serializer for creating or updating a tracked EMI."""

    name = serializers.CharField(
        max_length=100,
        required=True,
        help_text="Display name, e.g. 'Car loan'.",
    )
    loan_type = serializers.CharField(
        max_length=50,
        required=True,
        help_text="Kind of loan, e.g. home, car, personal.",
    )
    total_amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=True,
        help_text="Total amount to be repaid.",
    )
    emi_amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=True,
        help_text="Monthly installment amount.",
    )
    interest_rate = serializers.DecimalField(
        max_digits=5,
        decimal_places=2,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        required=True,
        help_text="Annual interest rate (%).",
    )
    total_installments = serializers.IntegerField(
        min_value=1,
        max_value=600,
        required=True,
        help_text="Number of monthly installments.",
    )
    start_date = serializers.DateField(
        required=True,
        help_text="Loan start date (YYYY-MM-DD).",
    )

    def validate_name(self, value):
        """Names are stored trimmed."""
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Name cannot be blank.")
        return value

    def validate_loan_type(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Loan type cannot be blank.")
        return value


class EMIResponseSerializer(serializers.Serializer):
    """Serializer for a tracked EMI in responses."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    loan_type = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    emi_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    interest_rate = serializers.DecimalField(max_digits=5, decimal_places=2)
    total_installments = serializers.IntegerField()
    paid_installments = serializers.IntegerField()
    installments_left = serializers.IntegerField()
    start_date = serializers.DateField()
    next_payment_date = serializers.DateField()
    status = serializers.ChoiceField(choices=EMI.Status.choices)
    remaining_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    progress_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2,
    )


class EMISummarySerializer(serializers.Serializer):
    """Serializer for totals across all tracked EMIs."""

    total_emi_amount = serializers.DecimalField(
        max_digits=17, decimal_places=2,
    )
    total_paid_amount = serializers.DecimalField(
        max_digits=17, decimal_places=2,
    )
    total_pending_amount = serializers.DecimalField(
        max_digits=17, decimal_places=2,
    )
    active_count = serializers.IntegerField()
    completed_count = serializers.IntegerField()
    overdue_count = serializers.IntegerField()
