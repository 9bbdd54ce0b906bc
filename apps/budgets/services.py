"""
Budget service layer.

Views delegate here; spending updates lock the budget row.
"""

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction

from apps.budgets.models import Budget
from apps.core.exceptions import BudgetNotFoundError, InvalidSpendError

logger = logging.getLogger(__name__)

# Largest value the spent column can hold
MAX_SPENT = Decimal('9999999999999.99')


def _not_found(budget_id: int) -> BudgetNotFoundError:
    return BudgetNotFoundError(detail=f"Budget with ID {budget_id} not found.")


class BudgetService:
    """Service class for budget operations."""

    @staticmethod
    def create(validated_data: dict) -> Budget:
        """
        Set up a new budget with nothing spent.

        Args:
            validated_data: Dict with category, amount, period and
                optionally description and start_date.
        """
        budget = Budget.objects.create(**validated_data)

        logger.info(
            "Created %s budget #%d '%s': %s",
            budget.period,
            budget.pk,
            budget.category,
            budget.amount,
        )
        return budget

    @staticmethod
    def get_budget(budget_id: int) -> Budget:
        try:
            return Budget.objects.get(pk=budget_id)
        except Budget.DoesNotExist:
            raise _not_found(budget_id)

    @staticmethod
    def list_budgets(period: Optional[str] = None):
        budgets = Budget.objects.all()
        if period:
            budgets = budgets.filter(period=period)
        return budgets.order_by('category', 'pk')

    @staticmethod
    @transaction.atomic
    def update(budget_id: int, validated_data: dict) -> Budget:
        """Edit a budget; the amount spent so far is kept."""
        try:
            budget = Budget.objects.select_for_update().get(pk=budget_id)
        except Budget.DoesNotExist:
            raise _not_found(budget_id)

        for name, value in validated_data.items():
            setattr(budget, name, value)
        budget.save()

        logger.info("Updated budget #%d '%s'", budget.pk, budget.category)
        return budget

    @staticmethod
    def delete(budget_id: int) -> None:
        deleted, _ = Budget.objects.filter(pk=budget_id).delete()
        if not deleted:
            raise _not_found(budget_id)
        logger.info("Deleted budget #%d", budget_id)

    @staticmethod
    @transaction.atomic
    def add_spent(budget_id: int, amount: Decimal) -> Budget:
        """
        Add ``amount`` to what has been spent against a budget.

        Raises:
            BudgetNotFoundError: If no budget has this ID.
            InvalidSpendError: If the total would drop below zero or
                exceed MAX_SPENT.
        """
        try:
            budget = Budget.objects.select_for_update().get(pk=budget_id)
        except Budget.DoesNotExist:
            raise _not_found(budget_id)

        spent = budget.spent + amount
        if spent < 0:
            raise InvalidSpendError(
                detail=f"Cannot reverse more than the {budget.spent} spent."
            )
        if spent > MAX_SPENT:
            raise InvalidSpendError()

        budget.spent = spent
        budget.save(update_fields=['spent', 'updated_at'])

        if budget.is_over_budget:
            logger.info(
                "Budget #%d '%s' is over: spent %s of %s",
                budget.pk,
                budget.category,
                budget.spent,
                budget.amount,
            )
        return budget
