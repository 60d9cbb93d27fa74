"""
Payroll calendar: the days of a payroll period (26th of the previous month .. 25th of the named month)
and day classification (weekday name, rest day, public holiday).
All values are datetime.date, which has no timezone, so a day never shifts.
"""
from collections import namedtuple
from datetime import date, timedelta

from .entities import PERIOD_START_DAY, WEEKDAY_NAMES, PayrollPeriod

THURSDAY = 'Thursday'

DayClassification = namedtuple('DayClassification', ['is_holiday', 'is_rest_day', 'weekday_name'])


def get_payroll_days(year, month):
    """Every day from the 26th of the previous month through the 25th of (year, month), ascending."""
    period = PayrollPeriod(year, month)
    days = []
    current = period.start_date
    while current <= period.end_date:
        days.append(current)
        current += timedelta(days=1)
    return days


def current_period(today=None):
    """Payroll period containing today: from the 26th onwards that is next month's period."""
    today = today or date.today()
    period = PayrollPeriod(today.year, today.month)
    if today.day >= PERIOD_START_DAY:
        return period.shift(1)
    return period


def weekday_name(day):
    return WEEKDAY_NAMES[day.weekday()]


def to_ymd(day):
    return day.strftime('%Y-%m-%d')


def holiday_dates(holidays):
    """Set of dates from PublicHoliday entities (or plain dates)."""
    return frozenset(h if isinstance(h, date) else h.date for h in holidays or ())


def classify_day(day, employee, holidays):
    """Weekday name, whether it is one of the employee's rest days, whether it is a public holiday."""
    name = weekday_name(day)
    return DayClassification(
        is_holiday=day in holiday_dates(holidays),
        is_rest_day=name in employee.rest_days,
        weekday_name=name,
    )
