import pytest
from datetime import date
from decimal import Decimal

from payroll.entities import Allowance, BonusDeduction, Loan, PayrollPeriod, PeriodSettings, PublicHoliday
from payroll.location_logic import (
    LocationCost, calculate_cost_distribution, calculate_location_summary, summarize_costs_by_location,
)
from payroll.report_logic import build_report_line

EPSILON = Decimal('0.01')
PERIOD = PayrollPeriod(2025, 3)


def _ordinary_days(days):
    """Days that are neither Thursday nor Friday."""
    return [day for day in days if day.weekday() not in (3, 4)]


def test_daily_paid_cost_split_by_days_per_location(make_employee, make_records, march_days):
    employee = make_employee(salary_type='Daily', salary_amount=Decimal('200'))
    days = _ordinary_days(march_days)
    assert len(days) == 20
    records = make_records(*[
        (day, employee.id, 8, 'A' if i < 12 else 'B') for i, day in enumerate(days)
    ])
    distribution = calculate_cost_distribution(employee, records, [], march_days)
    assert distribution['A'].base_cost == Decimal('2400')
    assert distribution['B'].base_cost == Decimal('1600')
    assert distribution['A'].days == 12
    assert sum(cost.base_cost for cost in distribution.values()) == Decimal('4000')


def test_location_summary_splits_shared_days(make_employee, make_records, march_days):
    employee = make_employee()
    records = make_records(
        (date(2025, 3, 4), 1, 4, 'A'),
        (date(2025, 3, 4), 1, 4, 'B'),
        (date(2025, 3, 5), 1, 8, 'A'),
    )
    summary = calculate_location_summary(employee, records, march_days)
    assert summary == {'A': Decimal('1.5'), 'B': Decimal('0.5')}


def test_location_summary_falls_back_to_work_location(make_employee, make_records, march_days):
    records = make_records((date(2025, 3, 4), 1, 8))
    assert calculate_location_summary(make_employee(work_location='Head Office'), records, march_days) == {
        'Head Office': Decimal('1'),
    }
    assert calculate_location_summary(make_employee(work_location=''), records, march_days) == {
        'Unassigned': Decimal('1'),
    }


def test_distribution_adds_back_up_to_report_line(make_employee, make_records, march_days):
    employee = make_employee(
        allowances={
            'transport': Allowance(Decimal('300'), 'Monthly'),
            'meal': Allowance(Decimal('10'), 'Daily'),
        },
    )
    records = make_records(
        (date(2025, 3, 3), 1, 10, 'A'),
        (date(2025, 3, 4), 1, 8, 'A'),
        (date(2025, 3, 4), 1, 1, 'B'),
        (date(2025, 3, 5), 1, 8, 'C'),
        (date(2025, 3, 7), 1, 5, 'B'),
        (date(2025, 3, 6), 1, 6, 'C'),
    )
    holidays = [PublicHoliday(date(2025, 3, 7), 'Holiday')]
    bonus = BonusDeduction(employee_id=1, bonus_amount=Decimal('100'), deduction_amount=Decimal('33.33'))
    loans = [Loan(employee_id=1, total_amount=Decimal('1000'), installments=3, start=PayrollPeriod(2025, 2))]
    settings = PeriodSettings(general_bonus_days=Decimal('1.5'))

    line = build_report_line(
        employee, PERIOD, records, holidays, march_days,
        loans=loans, bonus_deduction=bonus, period_settings=settings,
    )
    distribution = calculate_cost_distribution(
        employee, records, holidays, march_days,
        bonus_deduction=bonus,
        general_bonus_days=settings.general_bonus_days,
        total_overtime_pay=line.total_overtime_pay,
        loan_installment=line.loan_installment,
    )
    total = summarize_costs_by_location([distribution])[1]

    assert abs(total.base_cost - line.base_pay) < EPSILON
    assert abs(total.allowances_cost - line.total_allowances) < EPSILON
    assert abs(total.other_additions - (line.total_bonuses + line.general_bonus + line.total_overtime_pay)) < EPSILON
    assert abs(total.total_deductions - (line.manual_deduction + line.loan_installment)) < EPSILON
    assert abs(total.net_cost - line.net_salary) < EPSILON
    assert total.days == line.total_work_days
    assert abs(total.overtime_hours - line.summary.total_raw_overtime_hours) < EPSILON


def test_overtime_pay_computed_when_not_given(make_employee, make_records, march_days):
    employee = make_employee()
    records = make_records((date(2025, 3, 4), 1, 10, 'A'))
    distribution = calculate_cost_distribution(employee, records, [], march_days)
    assert distribution['A'].other_additions == Decimal('37.5')
    assert distribution['A'].overtime_hours == Decimal('2')


@pytest.mark.parametrize('salary_type, expected_base', [('Monthly', Decimal('3000')), ('Daily', Decimal('0'))])
def test_no_attended_days_puts_everything_on_home_location(make_employee, march_days, salary_type, expected_base):
    employee = make_employee(
        salary_type=salary_type,
        allowances={'housing': Allowance(Decimal('500'), 'Monthly'), 'meal': Allowance(Decimal('10'), 'Daily')},
    )
    bonus = BonusDeduction(employee_id=1, bonus_amount=Decimal('20'), deduction_amount=Decimal('5'))
    distribution = calculate_cost_distribution(employee, {}, [], march_days, bonus_deduction=bonus, loan_installment=100)
    assert list(distribution) == ['Site A']
    cost = distribution['Site A']
    assert cost.days == 0
    assert cost.base_cost == expected_base
    assert cost.allowances_cost == Decimal('500')
    assert cost.other_additions == Decimal('20')
    assert cost.total_deductions == Decimal('105')
    assert cost.net_cost == expected_base + Decimal('500') + Decimal('20') - Decimal('105')


def test_no_attended_days_monthly_without_extras(make_employee, march_days):
    distribution = calculate_cost_distribution(make_employee(), {}, [], march_days)
    assert distribution == {'Site A': LocationCost(base_cost=Decimal('3000'), net_cost=Decimal('3000'))}


def test_excluded_employee_gets_no_general_bonus(make_employee, make_records, march_days):
    employee = make_employee()
    records = make_records((date(2025, 3, 4), 1, 8, 'A'))
    included = calculate_cost_distribution(employee, records, [], march_days, general_bonus_days=2)
    excluded = calculate_cost_distribution(
        employee, records, [], march_days, general_bonus_days=2, excluded_employee_ids=frozenset({1}),
    )
    assert included['A'].other_additions == Decimal('200')
    assert excluded['A'].other_additions == 0


def test_summarize_costs_by_location():
    first = {'A': LocationCost(days=Decimal('2'), base_cost=Decimal('100'), net_cost=Decimal('100'))}
    second = {
        'A': LocationCost(days=Decimal('1'), base_cost=Decimal('50'), net_cost=Decimal('40'), total_deductions=Decimal('10')),
        'B': LocationCost(days=Decimal('3'), base_cost=Decimal('90'), net_cost=Decimal('90')),
    }
    by_location, grand_total = summarize_costs_by_location([first, second])
    assert by_location['A'].base_cost == Decimal('150')
    assert by_location['A'].net_cost == Decimal('140')
    assert by_location['B'].days == Decimal('3')
    assert grand_total.base_cost == Decimal('240')
    assert grand_total.total_deductions == Decimal('10')
    # inputs are not modified
    assert first['A'].base_cost == Decimal('100')
