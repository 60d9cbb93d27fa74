import logging
import pytest
from decimal import Decimal

from payroll.entities import Loan, PayrollPeriod
from payroll.loan_logic import find_active_loan, is_loan_active, loan_schedule, resolve_loan_installment


@pytest.fixture
def loan():
    return Loan(id=1, employee_id=7, total_amount=Decimal('1200'), installments=12, start='2025-01')


@pytest.mark.parametrize('key, active', [
    ('2024-12', False),
    ('2025-01', True),
    ('2025-03', True),
    ('2025-12', True),
    ('2026-01', False),
])
def test_loan_active_window(loan, key, active):
    assert is_loan_active(loan, PayrollPeriod.from_key(key)) is active


def test_installment_for_active_period(loan):
    assert resolve_loan_installment(7, [loan], PayrollPeriod(2025, 3)) == Decimal('100')
    assert resolve_loan_installment(8, [loan], PayrollPeriod(2025, 3)) == 0
    assert resolve_loan_installment(7, [], PayrollPeriod(2025, 3)) == 0


def test_uneven_installment_is_not_rounded():
    loan = Loan(employee_id=1, total_amount=Decimal('1000'), installments=3, start='2025-01')
    assert loan.installment_amount * 3 == pytest.approx(Decimal('1000'))
    assert loan.end == PayrollPeriod(2025, 3)


def test_loan_without_installments_is_never_active():
    loan = Loan(employee_id=1, total_amount=Decimal('500'), installments=0, start='2025-01')
    assert loan.installment_amount == 0
    assert not is_loan_active(loan, PayrollPeriod(2025, 1))
    assert loan_schedule(loan) == []


def test_overlapping_loans_use_most_recent_start(loan, caplog):
    newer = Loan(id=2, employee_id=7, total_amount=Decimal('300'), installments=3, start='2025-03')
    with caplog.at_level(logging.WARNING, logger='payroll.loan_logic'):
        chosen = find_active_loan(7, [loan, newer], PayrollPeriod(2025, 3))
    assert chosen is newer
    assert 'loans active' in caplog.text
    assert resolve_loan_installment(7, [loan, newer], PayrollPeriod(2025, 6)) == Decimal('100')


def test_overlapping_loans_same_start_use_highest_id():
    first = Loan(id=3, employee_id=1, total_amount=Decimal('600'), installments=6, start='2025-01')
    second = Loan(id=9, employee_id=1, total_amount=Decimal('900'), installments=3, start='2025-01')
    assert find_active_loan(1, [second, first], PayrollPeriod(2025, 2)) is second


def test_loan_schedule(loan):
    schedule = loan_schedule(loan)
    assert len(schedule) == 12
    assert schedule[0] == (PayrollPeriod(2025, 1), Decimal('100'))
    assert schedule[-1][0] == PayrollPeriod(2025, 12)
    assert sum(amount for _, amount in schedule) == Decimal('1200')
