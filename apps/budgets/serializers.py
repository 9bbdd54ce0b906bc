"""
Budget serializers.
"""

from decimal import Decimal

from rest_framework import serializers

from apps.budgets.models import Budget


class BudgetSerializer(serializers.Serializer):
    """Serializer for creating or updating a budget."""

    category = serializers.CharField(
        max_length=50,
        required=True,
        help_text="Spending category, e.g. groceries.",
    )
    amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal('0.01'),
        required=True,
        help_text="Spending limit for the period.",
    )
    description = serializers.CharField(
        max_length=255,
        required=False,
        allow_blank=True,
        default='',
    )
    period = serializers.ChoiceField(
        choices=Budget.Period.choices,
        default=Budget.Period.MONTHLY,
    )
    start_date = serializers.DateField(
        required=False,
        help_text="Date the budget was set up (YYYY-MM-DD); defaults to today.",
    )

    def validate_category(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Category cannot be blank.")
        return value

    def validate_description(self, value):
        return value.strip()


class BudgetSpendSerializer(serializers.Serializer):
    """
    Serializer for recording spending against a budget.

    A negative amount reverses earlier spending, e.g. a refund.
    """

    amount = serializers.DecimalField(
        max_digits=15,
        decimal_places=2,
        required=True,
    )

    def validate_amount(self, value):
        if value == 0:
            raise serializers.ValidationError("Amount cannot be zero.")
        return value


class BudgetResponseSerializer(serializers.Serializer):
    """Serializer for a budget in responses."""

    id = serializers.IntegerField()
    category = serializers.CharField()
    amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    description = serializers.CharField(allow_blank=True)
    period = serializers.ChoiceField(choices=Budget.Period.choices)
    start_date = serializers.DateField()
    spent = serializers.DecimalField(max_digits=15, decimal_places=2)
    remaining_amount = serializers.DecimalField(
        max_digits=16, decimal_places=2,
    )
    usage_percentage = serializers.DecimalField(
        max_digits=20, decimal_places=2,
    )
    is_over_budget = serializers.BooleanField()
