# Initial payroll schema: employees, attendance, holidays, loans, bonuses/deductions,
# period settings, archived periods, drivers/transport, system settings.

from decimal import Decimal

from django.db import migrations, models
import django.db.models.deletion


FREQUENCY_CHOICES = [('Monthly', 'Monthly'), ('Daily', 'Daily')]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('job_title', models.CharField(blank=True, max_length=100)),
                ('work_location', models.CharField(blank=True, help_text='Default location for days without one', max_length=100)),
                ('payment_source', models.CharField(blank=True, max_length=100)),
                ('salary_type', models.CharField(choices=[('Monthly', 'Monthly'), ('Daily', 'Daily')], default='Monthly', max_length=20)),
                ('salary_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('rest_days', models.JSONField(blank=True, default=list)),
                ('hours_per_day', models.DecimalField(decimal_places=2, default=Decimal('8'), max_digits=4)),
                ('is_head_office', models.BooleanField(default=False)),
                ('transport_allowance', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10)),
                ('transport_allowance_type', models.CharField(choices=FREQUENCY_CHOICES, default='Monthly', max_length=10)),
                ('expatriation_allowance', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10)),
                ('expatriation_allowance_type', models.CharField(choices=FREQUENCY_CHOICES, default='Monthly', max_length=10)),
                ('meal_allowance', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10)),
                ('meal_allowance_type', models.CharField(choices=FREQUENCY_CHOICES, default='Monthly', max_length=10)),
                ('housing_allowance', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10)),
                ('housing_allowance_type', models.CharField(choices=FREQUENCY_CHOICES, default='Monthly', max_length=10)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'employees',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='Holiday',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(unique=True)),
                ('name', models.CharField(max_length=255)),
                ('year', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'holidays',
                'ordering': ['date'],
            },
        ),
        migrations.CreateModel(
            name='Attendance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True)),
                ('hours', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5)),
                ('location', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance', to='payroll.employee')),
            ],
            options={
                'db_table': 'attendance',
                'ordering': ['-date', 'employee_id'],
            },
        ),
        migrations.CreateModel(
            name='Loan',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('installments', models.PositiveIntegerField(default=1)),
                ('start_year', models.PositiveIntegerField()),
                ('start_month', models.PositiveSmallIntegerField()),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='loans', to='payroll.employee')),
            ],
            options={
                'db_table': 'loans',
                'ordering': ['-start_year', '-start_month', '-id'],
            },
        ),
        migrations.CreateModel(
            name='BonusDeduction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period', models.CharField(db_index=True, help_text='YYYY-MM', max_length=7)),
                ('bonus_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('deduction_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('notes', models.CharField(blank=True, max_length=255)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='bonus_deductions', to='payroll.employee')),
            ],
            options={
                'db_table': 'bonuses_deductions',
                'ordering': ['-period', 'employee_id'],
            },
        ),
        migrations.AddConstraint(
            model_name='bonusdeduction',
            constraint=models.UniqueConstraint(fields=('employee', 'period'), name='unique_bonus_deduction_employee_period'),
        ),
        migrations.CreateModel(
            name='PayrollSettings',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period', models.CharField(help_text='YYYY-MM', max_length=7, unique=True)),
                ('general_bonus_days', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5)),
                ('excluded_employee_ids', models.JSONField(blank=True, default=list)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'payroll_settings',
                'verbose_name_plural': 'Payroll settings',
            },
        ),
        migrations.CreateModel(
            name='HistoricalPayroll',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period', models.CharField(help_text='YYYY-MM', max_length=7, unique=True)),
                ('report_data', models.JSONField(blank=True, null=True)),
                ('transport_cost_data', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'historical_payroll',
                'ordering': ['-period'],
            },
        ),
        migrations.CreateModel(
            name='Driver',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('daily_rate', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=10)),
                ('work_location', models.CharField(blank=True, max_length=100)),
                ('payment_source', models.CharField(blank=True, max_length=100)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'drivers',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='TransportAttendance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(db_index=True)),
                ('trips', models.DecimalField(decimal_places=2, default=Decimal('1'), max_digits=4)),
                ('driver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='trips', to='payroll.driver')),
            ],
            options={
                'db_table': 'transport_attendance',
                'ordering': ['-date', 'driver_id'],
            },
        ),
        migrations.AddConstraint(
            model_name='transportattendance',
            constraint=models.UniqueConstraint(fields=('driver', 'date'), name='unique_driver_date'),
        ),
        migrations.CreateModel(
            name='DriverFinancial',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('period', models.CharField(db_index=True, help_text='YYYY-MM', max_length=7)),
                ('type', models.CharField(choices=[('extra', 'Extra'), ('deduction', 'Deduction')], max_length=10)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('driver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='financials', to='payroll.driver')),
            ],
            options={
                'db_table': 'driver_financials',
                'ordering': ['-period', 'driver_id'],
            },
        ),
        migrations.CreateModel(
            name='SystemSetting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(max_length=100, unique=True)),
                ('value', models.CharField(max_length=255)),
                ('description', models.CharField(blank=True, max_length=255)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'system_settings',
            },
        ),
    ]
