import pytest
from datetime import date
from decimal import Decimal

from payroll import models
from payroll.entities import PayrollPeriod
from payroll.period_data import (
    employee_to_entity, load_attendance, load_loans, load_period_data, load_period_settings,
    load_transport_data, save_period_settings,
)

PERIOD = PayrollPeriod(2025, 3)


@pytest.mark.django_db
def test_employee_to_entity_normalizes_labels_and_allowances():
    obj = models.Employee.objects.create(
        name='Employee Y', salary_type='يومي', salary_amount=Decimal('150'),
        rest_days=['الجمعة', 'Saturday', 'unknown'],
        meal_allowance=Decimal('12'), meal_allowance_type='Daily',
        housing_allowance=Decimal('0'),
    )
    employee = employee_to_entity(obj)
    assert employee.salary_type == 'Daily'
    assert employee.rest_days == frozenset({'Friday', 'Saturday'})
    assert set(employee.allowances) == {'meal'}
    assert employee.allowances['meal'].is_daily
    assert employee.default_location == 'Unassigned'


@pytest.mark.django_db
def test_load_attendance_merges_rows_inside_the_period(office_data):
    emp = office_data['emp']
    models.Attendance.objects.create(employee=emp, date=date(2025, 3, 4), hours=Decimal('2'), location='Site C')
    models.Attendance.objects.create(employee=emp, date=date(2025, 3, 26), hours=Decimal('8'))
    records = load_attendance(PERIOD)
    assert records[date(2025, 3, 4)][emp.id].hours == Decimal('12')
    assert records[date(2025, 3, 4)][emp.id].locations == ('Site A', 'Site C')
    assert date(2025, 3, 26) not in records


@pytest.mark.django_db
def test_load_loans_skips_invalid_start(office_data):
    models.Loan.objects.create(employee=office_data['emp'], total_amount=Decimal('10'), installments=1, start_year=2025, start_month=13)
    loans = load_loans()
    assert len(loans) == 1
    assert loans[0].start == PayrollPeriod(2025, 1)


@pytest.mark.django_db
def test_period_settings_roundtrip():
    assert load_period_settings(PERIOD).general_bonus_days == 0
    save_period_settings(PERIOD, general_bonus_days=Decimal('2.5'), excluded_employee_ids=[3, 1, 3])
    settings = load_period_settings(PERIOD)
    assert settings.general_bonus_days == Decimal('2.5')
    assert settings.excluded_employee_ids == frozenset({1, 3})
    # only the given field changes
    save_period_settings(PERIOD, excluded_employee_ids=[])
    settings = load_period_settings(PERIOD)
    assert settings.general_bonus_days == Decimal('2.5')
    assert settings.excluded_employee_ids == frozenset()


@pytest.mark.django_db
def test_load_period_data_builds_report(office_data):
    data = load_period_data(PERIOD)
    report = data.build_report()
    line = report.lines[0]
    assert line.employee_id == office_data['emp'].id
    assert line.total_work_days == 2
    assert line.total_overtime_pay == Decimal('37.5')
    assert line.total_allowances == Decimal('300')
    assert line.loan_installment == Decimal('100')
    assert line.net_salary == Decimal('3287.5')

    analysis = data.build_cost_analysis(report)
    assert set(analysis.by_location) == {'Site A', 'Site B'}
    assert abs(analysis.grand_total.net_cost - line.net_salary) < Decimal('0.01')


@pytest.mark.django_db
def test_load_transport_data():
    driver = models.Driver.objects.create(name='Driver A', daily_rate=Decimal('50'))
    models.TransportAttendance.objects.create(driver=driver, date=date(2025, 3, 1), trips=Decimal('1'))
    models.TransportAttendance.objects.create(driver=driver, date=date(2025, 3, 2), trips=Decimal('1'))
    models.TransportAttendance.objects.create(driver=driver, date=date(2025, 4, 2), trips=Decimal('1'))
    models.DriverFinancial.objects.create(driver=driver, period='2025-03', type='extra', amount=Decimal('30'))
    models.DriverFinancial.objects.create(driver=driver, period='2025-04', type='extra', amount=Decimal('99'))
    report = load_transport_data(PERIOD).build_report()
    assert report.lines[0].total_days == Decimal('2')
    assert report.lines[0].total_cost == Decimal('130')
