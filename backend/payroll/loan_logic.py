"""
Loan repayment: a loan of N installments starting in period S is repaid in periods S .. S+N-1,
the same amount (total / N) each time.
When more than one loan is active for an employee, the most recently started one is used
(higher id on a tie) and the overlap is logged.
"""
import logging
from decimal import Decimal

logger = logging.getLogger(__name__)


def is_loan_active(loan, period):
    if loan.installments <= 0:
        return False
    return loan.start <= period <= loan.end


def find_active_loan(employee_id, loans, period):
    active = [loan for loan in loans or () if loan.employee_id == employee_id and is_loan_active(loan, period)]
    if not active:
        return None
    active.sort(key=lambda loan: (loan.start, loan.id if loan.id is not None else -1), reverse=True)
    if len(active) > 1:
        logger.warning(
            'Employee %s has %s loans active in %s; using loan %s started %s',
            employee_id, len(active), period, active[0].id, active[0].start,
        )
    return active[0]


def resolve_loan_installment(employee_id, loans, period):
    """Installment due in period, or 0 when no loan is active."""
    loan = find_active_loan(employee_id, loans, period)
    if loan is None:
        return Decimal('0')
    return loan.installment_amount


def loan_schedule(loan):
    """[(period, amount), ...] for every installment of the loan."""
    return [(loan.start.shift(i), loan.installment_amount) for i in range(max(loan.installments, 0))]
