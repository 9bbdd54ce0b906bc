from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='EMI',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Display name, e.g. 'Car loan'.", max_length=100)),
                ('loan_type', models.CharField(help_text='Kind of loan, e.g. home, car, personal.', max_length=50)),
                ('total_amount', models.DecimalField(decimal_places=2, help_text='Total amount to be repaid.', max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('emi_amount', models.DecimalField(decimal_places=2, help_text='Monthly installment amount.', max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('interest_rate', models.DecimalField(decimal_places=2, help_text='Annual interest rate (percentage).', max_digits=5, validators=[django.core.validators.MinValueValidator(Decimal('0')), django.core.validators.MaxValueValidator(Decimal('100'))])),
                ('total_installments', models.PositiveIntegerField(help_text='Number of monthly installments.', validators=[django.core.validators.MinValueValidator(1)])),
                ('paid_installments', models.PositiveIntegerField(default=0, help_text='Number of installments paid so far.')),
                ('start_date', models.DateField(help_text='Loan start date.')),
                ('next_payment_date', models.DateField(db_index=True, help_text='Due date of the next installment.')),
                ('status', models.CharField(choices=[('active', 'Active'), ('completed', 'Completed'), ('overdue', 'Overdue')], db_index=True, default='active', max_length=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'emis',
                'ordering': ['next_payment_date', 'pk'],
                'indexes': [models.Index(fields=['status', 'next_payment_date'], name='idx_emi_status_due')],
            },
        ),
    ]
