"""
EMI tracker service layer.

All EMI bookkeeping lives here: due dates, installment payments
and status transitions. Views delegate to this service.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta
from django.db import transaction
from django.db.models import Count, Q, Sum

from apps.core.exceptions import EMIAlreadyCompletedError, EMINotFoundError
from apps.emis.models import EMI

logger = logging.getLogger(__name__)


def next_payment_date_for(start_date: date, paid_installments: int) -> date:
    """Due date of the installment after ``paid_installments`` payments."""
    return start_date + relativedelta(months=paid_installments + 1)


def resolve_status(
    paid_installments: int,
    total_installments: int,
    next_payment_date: date,
    today: Optional[date] = None,
) -> str:
    """Status implied by payment progress and the next due date."""
    today = today or date.today()
    if paid_installments >= total_installments:
        return EMI.Status.COMPLETED
    if next_payment_date < today:
        return EMI.Status.OVERDUE
    return EMI.Status.ACTIVE


class EMIService:
    """Service class for EMI tracker operations."""

    @staticmethod
    def create(validated_data: dict) -> EMI:
        """
        Start tracking a new EMI.

        The first installment falls due one month after start_date.

        Args:
            validated_data: Dict with name, loan_type, total_amount,
                emi_amount, interest_rate, total_installments, start_date.

        Returns:
            The newly created EMI instance.
        """
        emi = EMI.objects.create(
            name=validated_data['name'],
            loan_type=validated_data['loan_type'],
            total_amount=validated_data['total_amount'],
            emi_amount=validated_data['emi_amount'],
            interest_rate=validated_data['interest_rate'],
            total_installments=validated_data['total_installments'],
            paid_installments=0,
            start_date=validated_data['start_date'],
            next_payment_date=next_payment_date_for(
                validated_data['start_date'], 0,
            ),
            status=EMI.Status.ACTIVE,
        )

        logger.info(
            "Tracking EMI #%d '%s': emi=%s x %d, first due %s",
            emi.pk,
            emi.name,
            emi.emi_amount,
            emi.total_installments,
            emi.next_payment_date,
        )

        return emi

    @staticmethod
    def get_emi(emi_id: int) -> EMI:
        """
        Retrieve a tracked EMI by ID.

        Raises:
            EMINotFoundError: If no EMI has this ID.
        """
        try:
            return EMI.objects.get(pk=emi_id)
        except EMI.DoesNotExist:
            raise EMINotFoundError(
                detail=f"EMI with ID {emi_id} not found."
            )

    @staticmethod
    def list_emis(status: Optional[str] = None):
        """Tracked EMIs, soonest due first, optionally filtered by status."""
        emis = EMI.objects.all()
        if status:
            emis = emis.filter(status=status)
        return emis.order_by('next_payment_date', 'pk')

    @classmethod
    @transaction.atomic
    def update(cls, emi_id: int, validated_data: dict) -> EMI:
        """
        Edit a tracked EMI, keeping its payment progress.

        The next due date is recomputed from the (possibly new) start date
        and the installments already paid.
        """
        try:
            emi = EMI.objects.select_for_update().get(pk=emi_id)
        except EMI.DoesNotExist:
            raise EMINotFoundError(
                detail=f"EMI with ID {emi_id} not found."
            )

        for name, value in validated_data.items():
            setattr(emi, name, value)

        emi.next_payment_date = next_payment_date_for(
            emi.start_date, emi.paid_installments,
        )
        emi.status = resolve_status(
            emi.paid_installments,
            emi.total_installments,
            emi.next_payment_date,
        )
        emi.save()

        logger.info("Updated EMI #%d '%s' (%s)", emi.pk, emi.name, emi.status)
        return emi

    @staticmethod
    def delete(emi_id: int) -> None:
        deleted, _ = EMI.objects.filter(pk=emi_id).delete()
        if not deleted:
            raise EMINotFoundError(
                detail=f"EMI with ID {emi_id} not found."
            )
        logger.info("Deleted EMI #%d", emi_id)

    @classmethod
    @transaction.atomic
    def mark_paid(cls, emi_id: int) -> EMI:
        """
        Record one installment payment.

        Locks the row so concurrent payments cannot both count
        the same installment.

        Raises:
            EMINotFoundError: If no EMI has this ID.
            EMIAlreadyCompletedError: If every installment is already paid.
        """
        try:
            emi = EMI.objects.select_for_update().get(pk=emi_id)
        except EMI.DoesNotExist:
            raise EMINotFoundError(
                detail=f"EMI with ID {emi_id} not found."
            )

        if emi.status == EMI.Status.COMPLETED:
            raise EMIAlreadyCompletedError()

        emi.paid_installments += 1
        emi.next_payment_date = emi.next_payment_date + relativedelta(months=1)
        emi.status = resolve_status(
            emi.paid_installments,
            emi.total_installments,
            emi.next_payment_date,
        )
        emi.save(update_fields=[
            'paid_installments', 'next_payment_date', 'status', 'updated_at',
        ])

        logger.info(
            "EMI #%d: installment %d/%d paid, next due %s (%s)",
            emi.pk,
            emi.paid_installments,
            emi.total_installments,
            emi.next_payment_date,
            emi.status,
        )

        return emi

    @staticmethod
    def mark_overdue(today: Optional[date] = None) -> int:
        """
        Flag active EMIs whose next installment is past due.

        Returns:
            Number of EMIs moved to overdue.
        """
        today = today or date.today()
        count = EMI.objects.filter(
            status=EMI.Status.ACTIVE,
            next_payment_date__lt=today,
        ).update(status=EMI.Status.OVERDUE)

        if count:
            logger.info("Marked %d EMI(s) overdue as of %s", count, today)
        return count

    @staticmethod
    def summary() -> dict:
        """
        Totals across all tracked EMIs.

        Returns:
            Dict with total_emi_amount, total_paid_amount,
            total_pending_amount (each EMI's remaining amount, so
            overpaid EMIs count as 0) and a count per status.
        """
        emis = EMI.objects.all()
        totals = emis.aggregate(
            total=Sum('total_amount'),
            active=Count('pk', filter=Q(status=EMI.Status.ACTIVE)),
            completed=Count('pk', filter=Q(status=EMI.Status.COMPLETED)),
            overdue=Count('pk', filter=Q(status=EMI.Status.OVERDUE)),
        )

        total_amount = totals['total'] or Decimal('0.00')
        paid_amount = Decimal('0.00')
        pending_amount = Decimal('0.00')
        for emi in emis:
            paid_amount += emi.paid_amount
            pending_amount += emi.remaining_amount

        return {
            'total_emi_amount': total_amount,
            'total_paid_amount': paid_amount,
            'total_pending_amount': pending_amount,
            'active_count': totals['active'],
            'completed_count': totals['completed'],
            'overdue_count': totals['overdue'],
        }
