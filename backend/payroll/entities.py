"""
Typed records consumed by the calculation modules.
Built from ORM rows in period_data.py; the calculators never see model instances.
Amounts and hours are Decimal; plain ints/floats/strings passed in are converted on construction.
"""
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import FrozenSet, Mapping, Optional, Tuple

from .exceptions import InvalidPeriodError
from .utils import to_decimal

SALARY_MONTHLY = 'Monthly'
SALARY_DAILY = 'Daily'

FREQUENCY_MONTHLY = 'Monthly'
FREQUENCY_DAILY = 'Daily'

ALLOWANCE_KINDS = ('transport', 'expatriation', 'meal', 'housing')

# Index matches date.weekday()
WEEKDAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')

UNASSIGNED_LOCATION = 'Unassigned'

# Payroll period: PERIOD_START_DAY of the previous month .. PERIOD_END_DAY of the named month
PERIOD_START_DAY = 26
PERIOD_END_DAY = 25

FINANCIAL_EXTRA = 'extra'
FINANCIAL_DEDUCTION = 'deduction'


def _coerce(obj, name, default=Decimal('0')):
    object.__setattr__(obj, name, to_decimal(getattr(obj, name), default))


@dataclass(frozen=True, order=True)
class PayrollPeriod:
    """Administrative month: 26th of the previous calendar month through the 25th of this one."""
    year: int
    month: int

    def __post_init__(self):
        try:
            year, month = int(self.year), int(self.month)
        except (TypeError, ValueError):
            raise InvalidPeriodError(f'Invalid payroll period {self.year!r}-{self.month!r}')
        if not 1 <= month <= 12 or not 1 <= year <= 9999:
            raise InvalidPeriodError(f'Invalid payroll period {year}-{month}')
        object.__setattr__(self, 'year', year)
        object.__setattr__(self, 'month', month)

    @classmethod
    def from_key(cls, key):
        """'2025-03' -> PayrollPeriod(2025, 3)."""
        try:
            year, month = str(key).strip().split('-')[:2]
        except ValueError:
            raise InvalidPeriodError(f'Invalid payroll period key {key!r}')
        return cls(year, month)

    @property
    def key(self):
        return f'{self.year:04d}-{self.month:02d}'

    def shift(self, months):
        index = self.year * 12 + (self.month - 1) + int(months)
        return PayrollPeriod(index // 12, index % 12 + 1)

    @property
    def start_date(self):
        previous = self.shift(-1)
        return date(previous.year, previous.month, PERIOD_START_DAY)

    @property
    def end_date(self):
        return date(self.year, self.month, PERIOD_END_DAY)

    def __str__(self):
        return self.key


@dataclass(frozen=True)
class Allowance:
    amount: Decimal
    frequency: str = FREQUENCY_MONTHLY

    def __post_init__(self):
        _coerce(self, 'amount')

    @property
    def is_daily(self):
        return self.frequency == FREQUENCY_DAILY


@dataclass(frozen=True)
class Employee:
    id: int
    name: str
    salary_type: str
    salary_amount: Decimal
    job_title: str = ''
    work_location: str = ''
    payment_source: str = ''
    rest_days: FrozenSet[str] = frozenset()
    hours_per_day: Decimal = Decimal('8')
    is_head_office: bool = False
    allowances: Mapping[str, Allowance] = field(default_factory=dict)
    is_active: bool = True

    def __post_init__(self):
        _coerce(self, 'salary_amount')
        _coerce(self, 'hours_per_day', Decimal('8'))
        object.__setattr__(self, 'rest_days', frozenset(self.rest_days or ()))

    @property
    def is_monthly(self):
        return self.salary_type == SALARY_MONTHLY

    @property
    def is_daily(self):
        return self.salary_type == SALARY_DAILY

    @property
    def default_location(self):
        return self.work_location or UNASSIGNED_LOCATION

    def iter_allowances(self):
        """Yield the employee's allowances in ALLOWANCE_KINDS order, skipping missing ones."""
        for kind in ALLOWANCE_KINDS:
            allowance = self.allowances.get(kind)
            if allowance is not None:
                yield allowance


@dataclass(frozen=True)
class PublicHoliday:
    date: date
    name: str = ''


@dataclass(frozen=True)
class AttendanceEntry:
    """One employee's merged attendance for one day."""
    hours: Decimal
    locations: Tuple[str, ...] = ()

    def __post_init__(self):
        _coerce(self, 'hours')
        object.__setattr__(self, 'locations', tuple(self.locations or ()))


@dataclass(frozen=True)
class Loan:
    employee_id: int
    total_amount: Decimal
    installments: int
    start: PayrollPeriod
    id: Optional[int] = None
    description: str = ''

    def __post_init__(self):
        _coerce(self, 'total_amount')
        object.__setattr__(self, 'installments', int(self.installments or 0))
        if not isinstance(self.start, PayrollPeriod):
            object.__setattr__(self, 'start', PayrollPeriod.from_key(self.start))

    @property
    def installment_amount(self):
        if self.installments <= 0:
            return Decimal('0')
        return self.total_amount / self.installments

    @property
    def end(self):
        """Last period with an installment (inclusive)."""
        return self.start.shift(self.installments - 1)


@dataclass(frozen=True)
class BonusDeduction:
    employee_id: int
    bonus_amount: Decimal = Decimal('0')
    deduction_amount: Decimal = Decimal('0')
    period: Optional[PayrollPeriod] = None
    notes: str = ''

    def __post_init__(self):
        _coerce(self, 'bonus_amount')
        _coerce(self, 'deduction_amount')


@dataclass(frozen=True)
class PeriodSettings:
    """Administrator settings for one payroll period."""
    general_bonus_days: Decimal = Decimal('0')
    excluded_employee_ids: FrozenSet[int] = frozenset()

    def __post_init__(self):
        _coerce(self, 'general_bonus_days')
        object.__setattr__(self, 'excluded_employee_ids', frozenset(self.excluded_employee_ids or ()))


@dataclass(frozen=True)
class Driver:
    id: int
    name: str
    daily_rate: Decimal
    work_location: str = ''
    payment_source: str = ''
    is_active: bool = True

    def __post_init__(self):
        _coerce(self, 'daily_rate')


@dataclass(frozen=True)
class DriverFinancial:
    driver_id: int
    kind: str
    amount: Decimal
    description: str = ''

    def __post_init__(self):
        _coerce(self, 'amount')
