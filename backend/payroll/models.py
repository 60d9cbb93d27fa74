"""
Payroll & Attendance - Database Models.
Calculation modules never touch these; period_data.py turns them into entities.
"""
from django.db import models
from decimal import Decimal


class Employee(models.Model):
    """Master employee table."""
    SALARY_MONTHLY = 'Monthly'
    SALARY_DAILY = 'Daily'
    SALARY_TYPE_CHOICES = [(SALARY_MONTHLY, 'Monthly'), (SALARY_DAILY, 'Daily')]
    FREQUENCY_CHOICES = [('Monthly', 'Monthly'), ('Daily', 'Daily')]

    name = models.CharField(max_length=255)
    job_title = models.CharField(max_length=100, blank=True)
    work_location = models.CharField(max_length=100, blank=True, help_text='Default location for days without one')
    payment_source = models.CharField(max_length=100, blank=True)
    salary_type = models.CharField(max_length=20, choices=SALARY_TYPE_CHOICES, default=SALARY_MONTHLY)
    salary_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    # English weekday names, e.g. ["Friday"]
    rest_days = models.JSONField(default=list, blank=True)
    hours_per_day = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('8'))
    is_head_office = models.BooleanField(default=False)
    transport_allowance = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    transport_allowance_type = models.CharField(max_length=10, choices=FREQUENCY_CHOICES, default='Monthly')
    expatriation_allowance = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    expatriation_allowance_type = models.CharField(max_length=10, choices=FREQUENCY_CHOICES, default='Monthly')
    meal_allowance = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    meal_allowance_type = models.CharField(max_length=10, choices=FREQUENCY_CHOICES, default='Monthly')
    housing_allowance = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    housing_allowance_type = models.CharField(max_length=10, choices=FREQUENCY_CHOICES, default='Monthly')
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'employees'
        ordering = ['id']

    def __str__(self):
        return f"{self.id} - {self.name}"


class Holiday(models.Model):
    """Public holidays."""
    date = models.DateField(unique=True)
    name = models.CharField(max_length=255)
    year = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'holidays'
        ordering = ['date']

    def save(self, *args, **kwargs):
        if self.date and not self.year:
            self.year = self.date.year
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.date} {self.name}"


class Attendance(models.Model):
    """Hours worked by one employee at one location on one day. Several rows per (employee, date) are allowed."""
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='attendance')
    date = models.DateField(db_index=True)
    hours = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'))
    location = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'attendance'
        ordering = ['-date', 'employee_id']

    def __str__(self):
        return f"{self.employee_id} {self.date} {self.hours}h"


class Loan(models.Model):
    """Repaid in equal installments, one per payroll period starting at (start_year, start_month)."""
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='loans')
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    installments = models.PositiveIntegerField(default=1)
    start_year = models.PositiveIntegerField()
    start_month = models.PositiveSmallIntegerField()
    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'loans'
        ordering = ['-start_year', '-start_month', '-id']

    def __str__(self):
        return f"{self.employee_id} {self.total_amount} from {self.start_year}-{self.start_month:02d}"


class BonusDeduction(models.Model):
    """Manual bonus and deduction for one employee in one period."""
    employee = models.ForeignKey(Employee, on_delete=models.CASCADE, related_name='bonus_deductions')
    period = models.CharField(max_length=7, db_index=True, help_text='YYYY-MM')
    bonus_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    deduction_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    notes = models.CharField(max_length=255, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bonuses_deductions'
        ordering = ['-period', 'employee_id']
        constraints = [
            models.UniqueConstraint(fields=['employee', 'period'], name='unique_bonus_deduction_employee_period')
        ]

    def __str__(self):
        return f"{self.employee_id} {self.period} +{self.bonus_amount} -{self.deduction_amount}"


class PayrollSettings(models.Model):
    """General bonus days and excluded employees for one period."""
    period = models.CharField(max_length=7, unique=True, help_text='YYYY-MM')
    general_bonus_days = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0'))
    excluded_employee_ids = models.JSONField(default=list, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payroll_settings'
        verbose_name_plural = 'Payroll settings'

    def __str__(self):
        return f"{self.period} bonus_days={self.general_bonus_days}"


class HistoricalPayroll(models.Model):
    """Archived (closed) period: JSON snapshot of the payroll report and the transport costs."""
    period = models.CharField(max_length=7, unique=True, help_text='YYYY-MM')
    report_data = models.JSONField(null=True, blank=True)
    transport_cost_data = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'historical_payroll'
        ordering = ['-period']

    def __str__(self):
        return self.period


class Driver(models.Model):
    name = models.CharField(max_length=255)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0'))
    work_location = models.CharField(max_length=100, blank=True)
    payment_source = models.CharField(max_length=100, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'drivers'
        ordering = ['name']

    def __str__(self):
        return self.name


class TransportAttendance(models.Model):
    """Trips (days) a driver worked on one date. UNIQUE (driver, date)."""
    driver = models.ForeignKey(Driver, on_delete=models.CASCADE, related_name='trips')
    date = models.DateField(db_index=True)
    trips = models.DecimalField(max_digits=4, decimal_places=2, default=Decimal('1'))

    class Meta:
        db_table = 'transport_attendance'
        ordering = ['-date', 'driver_id']
        constraints = [
            models.UniqueConstraint(fields=['driver', 'date'], name='unique_driver_date')
        ]

    def __str__(self):
        return f"{self.driver_id} {self.date} {self.trips}"


class DriverFinancial(models.Model):
    """Extra payment or deduction for a driver in one period."""
    TYPE_EXTRA = 'extra'
    TYPE_DEDUCTION = 'deduction'
    TYPE_CHOICES = [(TYPE_EXTRA, 'Extra'), (TYPE_DEDUCTION, 'Deduction')]

    driver = models.ForeignKey(Driver, on_delete=models.CASCADE, related_name='financials')
    period = models.CharField(max_length=7, db_index=True, help_text='YYYY-MM')
    type = models.CharField(max_length=10, choices=TYPE_CHOICES)
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    description = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'driver_financials'
        ordering = ['-period', 'driver_id']

    def __str__(self):
        return f"{self.driver_id} {self.period} {self.type} {self.amount}"


class SystemSetting(models.Model):
    """Key/value overrides (pay policy keys, see policy.POLICY_KEYS)."""
    key = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=255)
    description = models.CharField(max_length=255, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'system_settings'

    def __str__(self):
        return f"{self.key}={self.value}"
