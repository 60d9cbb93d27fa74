"""
Attendance summary for one employee over a payroll period: attended days and overtime in four buckets
(weekday, Thursday, rest day, public holiday). Each day is evaluated on its own; no state crosses days.

Holiday precedence:
  holiday that is also a rest day -> rest-day rate on all hours (any pay type)
  holiday, monthly-paid           -> flat holiday_base_hours at the hourly rate, whatever was worked
  holiday, daily-paid             -> ordinary Thursday / weekday overtime rules
"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from .entities import AttendanceEntry
from .period_logic import THURSDAY, classify_day, holiday_dates
from .policy import DEFAULT_POLICY
from .utils import to_decimal

logger = logging.getLogger(__name__)

ZERO = Decimal('0')


@dataclass
class OvertimeBucket:
    raw_hours: Decimal = ZERO
    calculated_value: Decimal = ZERO

    def add(self, hours, value):
        self.raw_hours += hours
        self.calculated_value += value


@dataclass
class AttendanceSummary:
    actual_attendance_days: int = 0
    weekday_overtime: OvertimeBucket = field(default_factory=OvertimeBucket)
    thursday_overtime: OvertimeBucket = field(default_factory=OvertimeBucket)
    rest_day_overtime: OvertimeBucket = field(default_factory=OvertimeBucket)
    holiday_overtime: OvertimeBucket = field(default_factory=OvertimeBucket)

    @property
    def buckets(self):
        return (self.weekday_overtime, self.thursday_overtime, self.rest_day_overtime, self.holiday_overtime)

    @property
    def total_overtime_value(self):
        return sum((b.calculated_value for b in self.buckets), ZERO)

    @property
    def total_raw_overtime_hours(self):
        return sum((b.raw_hours for b in self.buckets), ZERO)


def _parse_day(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def merge_attendance_rows(rows):
    """
    Build {date: {employee_id: AttendanceEntry}} from raw rows (dicts with date, employee_id, hours, location).
    Several rows for the same (date, employee) are merged: hours summed, locations unioned in first-seen order.
    Negative hours count as zero; rows with an unreadable date or hours are skipped.
    """
    hours_by_key = {}
    locations_by_key = {}
    for row in rows:
        day = _parse_day(row.get('date'))
        if day is None:
            logger.warning('Skipping attendance row with invalid date: %r', row)
            continue
        hours = to_decimal(row.get('hours'), default=None)
        if hours is None:
            logger.warning('Skipping attendance row with invalid hours: %r', row)
            continue
        if hours < 0:
            logger.warning('Negative hours %s for employee %s on %s counted as 0', hours, row.get('employee_id'), day)
            hours = ZERO
        key = (day, row.get('employee_id'))
        hours_by_key[key] = hours_by_key.get(key, ZERO) + hours
        locations = locations_by_key.setdefault(key, [])
        location = (row.get('location') or '').strip()
        if location and location not in locations:
            locations.append(location)

    records = {}
    for (day, employee_id), hours in hours_by_key.items():
        records.setdefault(day, {})[employee_id] = AttendanceEntry(
            hours=hours,
            locations=tuple(locations_by_key[(day, employee_id)]),
        )
    return records


def get_attendance_entry(attendance_records, day, employee_id):
    return (attendance_records.get(day) or {}).get(employee_id)


def attended_hours(attendance_records, day, employee_id):
    """Hours worked that day, or 0 when there is no record."""
    entry = get_attendance_entry(attendance_records, day, employee_id)
    if entry is None:
        return ZERO
    return max(entry.hours, ZERO)


def calculate_attendance_summary(employee, attendance_records, public_holidays, payroll_days, policy=None):
    policy = policy or DEFAULT_POLICY
    summary = AttendanceSummary()
    hourly_rate = policy.hourly_rate(employee)
    holidays = holiday_dates(public_holidays)

    for day in payroll_days:
        hours = attended_hours(attendance_records, day, employee.id)
        if hours <= 0:
            continue
        summary.actual_attendance_days += 1

        day_info = classify_day(day, employee, holidays)
        is_thursday = day_info.weekday_name == THURSDAY

        if day_info.is_holiday and day_info.is_rest_day:
            summary.rest_day_overtime.add(hours, hours * policy.overtime_rate_rest_day * hourly_rate)
        elif day_info.is_holiday and employee.is_monthly:
            summary.holiday_overtime.add(hours, policy.holiday_base_hours * hourly_rate)
        elif day_info.is_rest_day:
            summary.rest_day_overtime.add(hours, hours * policy.overtime_rate_rest_day * hourly_rate)
        elif is_thursday:
            overtime = max(ZERO, hours - policy.thursday_standard_hours(employee))
            if overtime > 0:
                summary.thursday_overtime.add(overtime, overtime * policy.overtime_rate_weekday * hourly_rate)
        else:
            overtime = max(ZERO, hours - employee.hours_per_day)
            if overtime > 0:
                summary.weekday_overtime.add(overtime, overtime * policy.overtime_rate_weekday * hourly_rate)

    return summary
