"""
EMI model for the loan tracker.
"""

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class EMI(models.Model):
    """
    A loan being repaid in equated monthly installments.

    Tracks how many installments have been paid, when the next one
    is due, and whether the loan is active, completed or overdue.
    """

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        COMPLETED = 'completed', 'Completed'
        OVERDUE = 'overdue', 'Overdue'

    name = models.CharField(
        max_length=100,
        help_text="Display name, e.g. 'Car loan'."
    )
    loan_type = models.CharField(
        max_length=50,
        help_text="Kind of loan, e.g. home, car, personal."
    )
    total_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Total amount to be repaid.",
    )
    emi_amount = models.DecimalField(
        max_digits=15,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text="Monthly installment amount.",
    )
    interest_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[
            MinValueValidator(Decimal('0')),
            MaxValueValidator(Decimal('100')),
        ],
        help_text="Annual interest rate (percentage).",
    )
    total_installments = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
        help_text="Number of monthly installments."
    )
    paid_installments = models.PositiveIntegerField(
        default=0,
        help_text="Number of installments paid so far."
    )
    start_date = models.DateField(
        help_text="Loan start date."
    )
    next_payment_date = models.DateField(
        db_index=True,
        help_text="Due date of the next installment."
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'emis'
        ordering = ['next_payment_date', 'pk']
        indexes = [
            models.Index(
                fields=['status', 'next_payment_date'],
                name='idx_emi_status_due'
            ),
        ]

    def __str__(self):
        return f"EMI #{self.pk} - {self.name} ({self.status})"

    @property
    def installments_left(self):
        return max(0, self.total_installments - self.paid_installments)

    @property
    def paid_amount(self):
        return self.emi_amount * self.paid_installments

    @property
    def remaining_amount(self):
        """Outstanding amount, never below zero."""
        return max(Decimal('0.00'), self.total_amount - self.paid_amount)

    @property
    def progress_percentage(self):
        """Share of installments paid, as a percentage with 2 decimals."""
        progress = (
            Decimal(self.paid_installments)
            / Decimal(self.total_installments)
            * 100
        )
        return min(progress, Decimal('100')).quantize(Decimal('0.01'))
