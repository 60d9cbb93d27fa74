class PayrollError(Exception):
    """Base class for payroll errors raised outside the calculation functions."""


class InvalidPeriodError(PayrollError, ValueError):
    """Year/month pair that does not name a payroll period."""


class PeriodClosedError(PayrollError):
    """Payroll period already archived; it must be reopened before it can change."""

    def __init__(self, period):
        self.period = period
        super().__init__(f'Payroll period {period} is already archived')
