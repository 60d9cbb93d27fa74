import pytest
from datetime import date
from decimal import Decimal
from rest_framework.test import APIClient

from payroll.entities import Employee
from payroll.attendance_logic import merge_attendance_rows
from payroll.period_logic import get_payroll_days
from payroll import models

# Period 2025-03 runs Wed 2025-02-26 .. Tue 2025-03-25
MARCH_2025 = (2025, 3)


@pytest.fixture
def march_days():
    return get_payroll_days(*MARCH_2025)


@pytest.fixture
def make_employee():
    """Employee X: monthly 3000, 8h/day, rest day Friday, site staff, no allowances."""
    def _make(**overrides):
        values = {
            'id': 1,
            'name': 'Employee X',
            'salary_type': 'Monthly',
            'salary_amount': Decimal('3000'),
            'work_location': 'Site A',
            'rest_days': {'Friday'},
        }
        values.update(overrides)
        return Employee(**values)
    return _make


@pytest.fixture
def make_records():
    """Attendance records from (date, employee_id, hours[, location]) tuples."""
    def _make(*rows):
        return merge_attendance_rows(
            {'date': r[0], 'employee_id': r[1], 'hours': r[2], 'location': r[3] if len(r) > 3 else ''}
            for r in rows
        )
    return _make


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def office_data(db):
    """One monthly-paid employee with attendance, a loan, a bonus and a holiday in period 2025-03."""
    emp = models.Employee.objects.create(
        name='Employee X', job_title='Engineer', work_location='Site A', payment_source='Bank',
        salary_type='Monthly', salary_amount=Decimal('3000'), rest_days=['Friday'],
        transport_allowance=Decimal('300'), transport_allowance_type='Monthly',
    )
    models.Attendance.objects.create(employee=emp, date=date(2025, 3, 4), hours=Decimal('10'), location='Site A')
    models.Attendance.objects.create(employee=emp, date=date(2025, 3, 5), hours=Decimal('8'), location='Site B')
    models.Holiday.objects.create(date=date(2025, 3, 7), name='Holiday on Friday')
    models.Loan.objects.create(employee=emp, total_amount=Decimal('1200'), installments=12, start_year=2025, start_month=1)
    models.BonusDeduction.objects.create(employee=emp, period='2025-03', bonus_amount=Decimal('100'), deduction_amount=Decimal('50'))
    return {'emp': emp}
