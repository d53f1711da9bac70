from decimal import Decimal

import django.core.validators
import django.utils.timezone
from django.db import migrations, models

import apps.payments.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('receiver', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('success', 'Success'), ('pending', 'Pending'), ('failed', 'Failed')], default='pending', max_length=20)),
                ('method', models.CharField(choices=[('upi', 'UPI'), ('credit_card', 'Credit Card'), ('debit_card', 'Debit Card'), ('net_banking', 'Net Banking'), ('wallet', 'Wallet')], max_length=20)),
                ('description', models.TextField(blank=True)),
                ('transaction_id', models.CharField(default=apps.payments.models.generate_transaction_id, editable=False, max_length=32, unique=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['status', 'created_at'], name='payments_status_created_idx'),
                    models.Index(fields=['method', 'created_at'], name='payments_method_created_idx'),
                    models.Index(fields=['created_at'], name='payments_created_at_idx'),
                ],
            },
        ),
    ]
