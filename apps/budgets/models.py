"""
Budget model: a spending limit per category and period.
"""

from datetime import date
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models


class Budget(models.Model):
    """
    A spending limit for one category over a recurring period.

    ``spent`` accumulates recorded spending; it may exceed ``amount``,
    in which case the budget is over.
    """

    class Period(models.TextChoices):
        DAILY = 'daily', 'Daily'
        WEEKLY = 'weekly', 'Weekly'
        MONTHLY = 'monthly', 'Monthly'
        YEARLY = 'yearly', 'Yearly'

    category = models.CharField(
        max_length=50,
        help_text="Spending category, e.g. groceries."
    )
    amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Spending limit for the period.",
    )
    description = models.CharField(
        max_length=255,
        blank=True,
        default='',
    )
    period = models.CharField(
        max_length=10,
        choices=Period.choices,
        default=Period.MONTHLY,
        db_index=True,
    )
    start_date = models.DateField(
        default=date.today,
        help_text="Date the budget was set up.",
    )
    spent = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Amount spent so far.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'budgets'
        ordering = ['category', 'pk']

    def __str__(self):
        return f"Budget #{self.pk} - {self.category} ({self.period})"

    @property
    def remaining_amount(self):
        """Amount left to spend; negative once over budget."""
        return self.amount - self.spent

    @property
    def is_over_budget(self):
        return self.spent > self.amount

    @property
    def usage_percentage(self):
        return (self.spent / self.amount * 100).quantize(Decimal('0.01'))
