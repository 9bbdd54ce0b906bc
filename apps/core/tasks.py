"""
Celery tasks for EMI data ingestion and due-date bookkeeping.

Reads emi_data.xlsx using pandas and upserts tracked EMIs
with idempotency guarantees.
"""

import logging
from decimal import Decimal
from pathlib import Path

import pandas as pd
from celery import shared_task
from django.conf import settings
from django.db import DatabaseError, transaction

from apps.core.exceptions import DataIngestionError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (
    'name',
    'total_amount',
    'emi_amount',
    'total_installments',
    'start_date',
)


def _cell(row, column, default=0):
    """Row value, with NaN/missing cells replaced by ``default``."""
    value = row.get(column, default)
    if pd.isna(value):
        return default
    return value


@shared_task(
    bind=True,
    name='core.ingest_emi_data',
    max_retries=3,
    default_retry_delay=10,
)
def ingest_emi_data(self):
    """
    Ingest tracked EMIs from emi_data.xlsx.

    Reads the Excel file, validates each row, and upserts on
    (name, start_date) via update_or_create.

    This task is idempotent — safe to run multiple times.
    """
    from apps.emis.models import EMI
    from apps.emis.serializers import EMISerializer
    from apps.emis.services import next_payment_date_for, resolve_status

    file_path = Path(settings.DATA_DIR) / 'emi_data.xlsx'

    if not file_path.exists():
        logger.error("EMI data file not found: %s", file_path)
        return {'status': 'error', 'message': f'File not found: {file_path}'}

    try:
        logger.info("Starting EMI data ingestion from %s", file_path)

        df = pd.read_excel(file_path)
        logger.info("Read %d rows from emi_data.xlsx", len(df))

        # Normalize column names
        df.columns = [
            str(col).strip().lower().replace(' ', '_') for col in df.columns
        ]

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise DataIngestionError(
                f"Missing columns: {', '.join(missing)}"
            )

        created_count = 0
        updated_count = 0
        error_count = 0

        for index, row in df.iterrows():
            try:
                start_date = pd.to_datetime(
                    row.get('start_date'), errors='coerce'
                )
                row_data = {
                    'name': str(_cell(row, 'name', '')),
                    'loan_type': str(_cell(row, 'loan_type', 'personal')),
                    'total_amount': Decimal(str(_cell(row, 'total_amount'))),
                    'emi_amount': Decimal(str(_cell(row, 'emi_amount'))),
                    'interest_rate': Decimal(str(_cell(row, 'interest_rate'))),
                    'total_installments': int(_cell(row, 'total_installments')),
                    'start_date': (
                        None if pd.isna(start_date) else start_date.date()
                    ),
                }

                # Same rules as the API: lengths, ranges, required values
                serializer = EMISerializer(data=row_data)
                if not serializer.is_valid():
                    logger.warning(
                        "Row %d: invalid values %s, skipping",
                        index,
                        dict(serializer.errors),
                    )
                    error_count += 1
                    continue

                emi_data = dict(serializer.validated_data)
                name = emi_data.pop('name')
                start_date = emi_data.pop('start_date')

                paid_installments = int(_cell(row, 'paid_installments'))
                if paid_installments < 0:
                    logger.warning(
                        "Row %d: negative paid_installments, skipping", index
                    )
                    error_count += 1
                    continue

                total_installments = emi_data['total_installments']
                paid_installments = min(paid_installments, total_installments)
                next_payment_date = next_payment_date_for(
                    start_date, paid_installments,
                )
                emi_data.update({
                    'paid_installments': paid_installments,
                    'next_payment_date': next_payment_date,
                    'status': resolve_status(
                        paid_installments,
                        total_installments,
                        next_payment_date,
                    ),
                })

                with transaction.atomic():
                    _, created = EMI.objects.update_or_create(
                        name=name,
                        start_date=start_date,
                        defaults=emi_data,
                    )

                if created:
                    created_count += 1
                else:
                    updated_count += 1

            except EMI.MultipleObjectsReturned:
                logger.warning(
                    "Row %d: several EMIs named '%s' start on %s, skipping",
                    index,
                    name,
                    start_date,
                )
                error_count += 1
                continue

            except (
                ValueError,
                TypeError,
                ArithmeticError,
                DatabaseError,
            ) as e:
                logger.warning(
                    "Row %d: failed to process — %s", index, str(e)
                )
                error_count += 1
                continue

        result = {
            'status': 'success',
            'total_rows': len(df),
            'created': created_count,
            'updated': updated_count,
            'errors': error_count,
        }
        logger.info("EMI data ingestion complete: %s", result)
        return result

    except DataIngestionError as exc:
        logger.error("EMI data ingestion aborted: %s", exc)
        return {'status': 'error', 'message': str(exc)}

    except Exception as exc:
        logger.exception("EMI data ingestion failed")
        raise self.retry(exc=exc)


@shared_task(name='core.mark_overdue_emis')
def mark_overdue_emis():
    """Flag active EMIs whose next installment is past due."""
    from apps.emis.services import EMIService

    count = EMIService.mark_overdue()
    return {'status': 'success', 'marked_overdue': count}
