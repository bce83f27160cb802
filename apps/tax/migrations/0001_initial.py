import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='IncomeTaxReturn',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('tax_year', models.PositiveIntegerField(db_index=True)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('SUBMITTED', 'Submitted'), ('UNDER_REVIEW', 'Under review'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected'), ('AMENDED', 'Amended')], db_index=True, default='DRAFT', max_length=20)),
                ('first_name', models.CharField(blank=True, max_length=100)),
                ('middle_initial', models.CharField(blank=True, max_length=1)),
                ('last_name', models.CharField(blank=True, max_length=100)),
                ('resident_id', models.CharField(blank=True, max_length=50)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('accounting_method', models.CharField(choices=[('CASH', 'Cash'), ('ACCRUAL', 'Accrual')], default='CASH', max_length=10)),
                ('address_line1', models.CharField(blank=True, max_length=200)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('postal_code', models.CharField(blank=True, max_length=20)),
                ('country', models.CharField(blank=True, default='Honduras', max_length=100)),
                ('mtc_credit', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('penalties', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('interest', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('applied_credit', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('total_due', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('signature_data', models.TextField(blank=True)),
                ('signed_at', models.DateTimeField(blank=True, null=True)),
                ('certification_accepted', models.BooleanField(default=False)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('employment_income', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('business_income', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('entity_distributions', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('income_sources', models.JSONField(blank=True, default=list)),
                ('presumed_employment_income', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('presumed_business_income', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('entity_distribution_deduction', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('aggregate_presumed_income', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('initial_tax', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('tax_liability', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('preparer_name', models.CharField(blank=True, max_length=200)),
                ('preparer_email', models.EmailField(blank=True, max_length=254)),
                ('preparer_phone', models.CharField(blank=True, max_length=30)),
                ('preparer_address', models.CharField(blank=True, max_length=300)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='incometaxreturn_set', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'income_tax_returns',
                'ordering': ['-tax_year'],
                'abstract': False,
                'indexes': [models.Index(fields=['user', 'status'], name='income_tax_user_status_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'tax_year'), name='unique_income_tax_return_per_year'), models.CheckConstraint(condition=models.Q(('total_due__gte', 0)), name='income_tax_total_due_non_negative')],
            },
        ),
        migrations.CreateModel(
            name='VatReturn',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('tax_year', models.PositiveIntegerField(db_index=True)),
                ('status', models.CharField(choices=[('DRAFT', 'Draft'), ('SUBMITTED', 'Submitted'), ('UNDER_REVIEW', 'Under review'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected'), ('AMENDED', 'Amended')], db_index=True, default='DRAFT', max_length=20)),
                ('first_name', models.CharField(blank=True, max_length=100)),
                ('middle_initial', models.CharField(blank=True, max_length=1)),
                ('last_name', models.CharField(blank=True, max_length=100)),
                ('resident_id', models.CharField(blank=True, max_length=50)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('accounting_method', models.CharField(choices=[('CASH', 'Cash'), ('ACCRUAL', 'Accrual')], default='CASH', max_length=10)),
                ('address_line1', models.CharField(blank=True, max_length=200)),
                ('city', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('postal_code', models.CharField(blank=True, max_length=20)),
                ('country', models.CharField(blank=True, default='Honduras', max_length=100)),
                ('mtc_credit', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('penalties', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('interest', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('applied_credit', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('total_due', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('signature_data', models.TextField(blank=True)),
                ('signed_at', models.DateTimeField(blank=True, null=True)),
                ('certification_accepted', models.BooleanField(default=False)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('quarter', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)])),
                ('period_start', models.DateField(blank=True, null=True)),
                ('period_end', models.DateField(blank=True, null=True)),
                ('total_retail_sales', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('sales_breakdown', models.JSONField(blank=True, default=list)),
                ('value_added', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('initial_vat', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('vat_liability', models.DecimalField(decimal_places=2, default=decimal.Decimal('0.00'), max_digits=15, validators=[django.core.validators.MinValueValidator(decimal.Decimal('0.00'))])),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='vatreturn_set', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'vat_returns',
                'ordering': ['-tax_year', '-quarter'],
                'abstract': False,
                'indexes': [models.Index(fields=['user', 'status'], name='vat_user_status_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'tax_year', 'quarter'), name='unique_vat_return_per_quarter'), models.CheckConstraint(condition=models.Q(('quarter__gte', 1), ('quarter__lte', 4)), name='vat_return_quarter_range'), models.CheckConstraint(condition=models.Q(('total_due__gte', 0)), name='vat_total_due_non_negative')],
            },
        ),
    ]
