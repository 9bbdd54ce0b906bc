import datetime
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Budget',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(help_text='Spending category, e.g. groceries.', max_length=50)),
                ('amount', models.DecimalField(decimal_places=2, help_text='Spending limit for the period.', max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('description', models.CharField(blank=True, default='', max_length=255)),
                ('period', models.CharField(choices=[('daily', 'Daily'), ('weekly', 'Weekly'), ('monthly', 'Monthly'), ('yearly', 'Yearly')], db_index=True, default='monthly', max_length=10)),
                ('start_date', models.DateField(default=datetime.date.today, help_text='Date the budget was set up.')),
                ('spent', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Amount spent so far.', max_digits=15, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'budgets',
                'ordering': ['category', 'pk'],
            },
        ),
    ]
