"""
Tests for the EMI data ingestion Celery task.

Uses task.apply() to run the task synchronously in the test environment.
"""

import os
import shutil
import tempfile
from datetime import date
from decimal import Decimal

import pandas as pd
from django.test import TestCase, override_settings

from apps.core.tasks import ingest_emi_data
from apps.emis.models import EMI


@override_settings(
    CELERY_TASK_ALWAYS_EAGER=True,
    CELERY_TASK_EAGER_PROPAGATES=True,
)
class EMIIngestionTests(TestCase):
    """Test cases for EMI data ingestion."""

    def setUp(self):
        """Create a temporary Excel file for testing."""
        self.temp_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.temp_dir, ignore_errors=True)

        self.write_sheet({
            'Name': ['Car loan', 'Home loan', 'Phone'],
            'Loan Type': ['car', 'home', 'personal'],
            'Total Amount': [120000, 2400000, 30000],
            'EMI Amount': [10000, 20000, 2500],
            'Interest Rate': [9.5, 8.25, 0],
            'Total Installments': [12, 120, 12],
            'Paid Installments': [3, 0, 12],
            'Start Date': ['2023-01-15', '2099-01-01', '2022-05-01'],
        })

    def write_sheet(self, data, directory=None):
        pd.DataFrame(data).to_excel(
            os.path.join(directory or self.temp_dir, 'emi_data.xlsx'),
            index=False,
        )

    def test_ingest_emi_data(self):
        """Test successful EMI data ingestion."""
        with self.settings(DATA_DIR=self.temp_dir):
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(result['total_rows'], 3)
        self.assertEqual(result['created'], 3)
        self.assertEqual(result['errors'], 0)

        car = EMI.objects.get(name='Car loan')
        self.assertEqual(car.paid_installments, 3)
        self.assertEqual(car.start_date, date(2023, 1, 15))
        self.assertEqual(car.next_payment_date, date(2023, 5, 15))
        self.assertEqual(car.status, EMI.Status.OVERDUE)

        self.assertEqual(
            EMI.objects.get(name='Home loan').status, EMI.Status.ACTIVE,
        )
        self.assertEqual(
            EMI.objects.get(name='Phone').status, EMI.Status.COMPLETED,
        )

    def test_ingest_idempotent(self):
        """Running ingestion twice doesn't create duplicates."""
        with self.settings(DATA_DIR=self.temp_dir):
            ingest_emi_data.apply().get()
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(EMI.objects.count(), 3)
        self.assertEqual(result['updated'], 3)

    def test_invalid_rows_skipped(self):
        """Rows without a start date or with bad amounts are counted as errors."""
        temp_dir2 = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, temp_dir2, ignore_errors=True)
        self.write_sheet({
            'name': ['Good', 'No date', 'Negative', 'Bad count'],
            'loan_type': ['car', 'car', 'car', 'car'],
            'total_amount': [1000, 1000, -5, 1000],
            'emi_amount': [100, 100, 100, 100],
            'interest_rate': [10, 10, 10, 10],
            'total_installments': [10, 10, 10, 0],
            'paid_installments': [0, 0, 0, 0],
            'start_date': ['2024-01-01', None, '2024-01-01', '2024-01-01'],
        }, directory=temp_dir2)

        with self.settings(DATA_DIR=temp_dir2):
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['created'], 1)
        self.assertEqual(result['errors'], 3)
        self.assertEqual(EMI.objects.count(), 1)

    def test_missing_columns(self):
        """A sheet without the required columns is rejected as a whole."""
        temp_dir2 = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, temp_dir2, ignore_errors=True)
        self.write_sheet({'name': ['Car loan']}, directory=temp_dir2)

        with self.settings(DATA_DIR=temp_dir2):
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['status'], 'error')
        self.assertIn('emi_amount', result['message'])
        self.assertEqual(EMI.objects.count(), 0)

    def test_missing_file(self):
        """Test graceful handling of missing file."""
        with self.settings(DATA_DIR='/nonexistent/path'):
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['status'], 'error')

    def test_out_of_range_values_skipped(self):
        """Rows are held to the same limits as the API."""
        temp_dir2 = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, temp_dir2, ignore_errors=True)
        self.write_sheet({
            'Name': ['Good', 'Loan shark', 'x' * 150],
            'Loan Type': ['car', 'personal', 'car'],
            'Total Amount': [1000, 1000, 1000],
            'EMI Amount': [100, 100, 100],
            'Interest Rate': [10, 250, 10],
            'Total Installments': [10, 10, 10],
            'Paid Installments': [0, 0, 0],
            'Start Date': ['2024-01-01', '2024-01-01', '2024-01-01'],
        }, directory=temp_dir2)

        with self.settings(DATA_DIR=temp_dir2):
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['created'], 1)
        self.assertEqual(result['errors'], 2)
        self.assertFalse(EMI.objects.filter(name='Loan shark').exists())

    def test_ambiguous_rows_skipped(self):
        """A row matching several tracked EMIs is an error, not a task failure."""
        for _ in range(2):
            EMI.objects.create(
                name='Car loan',
                loan_type='car',
                total_amount=Decimal('120000.00'),
                emi_amount=Decimal('10000.00'),
                interest_rate=Decimal('9.50'),
                total_installments=12,
                start_date=date(2023, 1, 15),
                next_payment_date=date(2023, 2, 15),
            )

        with self.settings(DATA_DIR=self.temp_dir):
            result = ingest_emi_data.apply().get()

        self.assertEqual(result['status'], 'success')
        self.assertEqual(result['errors'], 1)
        self.assertEqual(result['created'], 2)
        self.assertEqual(EMI.objects.filter(name='Car loan').count(), 2)
