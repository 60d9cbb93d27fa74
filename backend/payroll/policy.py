"""
Pay policy: overtime multipliers, Thursday thresholds and rate conventions carried as data,
so rule variations are configuration rather than separate code paths.
Defaults come from settings.PAYROLL_POLICY; any key can be overridden by a SystemSetting row.
"""
import logging
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation

from .utils import to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollPolicy:
    overtime_rate_weekday: Decimal = Decimal('1.5')
    overtime_rate_rest_day: Decimal = Decimal('2.0')
    # Monthly-paid holiday attendance is paid as this many hours, whatever was worked
    holiday_base_hours: Decimal = Decimal('16')
    thursday_hours_head_office: Decimal = Decimal('3')
    thursday_hours_site: Decimal = Decimal('4')
    # Fixed 30-day month, not the real number of days
    monthly_rate_days: Decimal = Decimal('30')
    hourly_rate_divisor: Decimal = Decimal('8')

    def daily_rate(self, employee):
        if employee.is_daily:
            return employee.salary_amount
        return employee.salary_amount / self.monthly_rate_days

    def hourly_rate(self, employee):
        return self.daily_rate(employee) / self.hourly_rate_divisor

    def thursday_standard_hours(self, employee):
        return self.thursday_hours_head_office if employee.is_head_office else self.thursday_hours_site

    def base_pay(self, employee, attendance_days):
        """Monthly: full salary whatever the attendance. Daily: attended days x daily rate."""
        if employee.is_daily:
            return to_decimal(attendance_days) * self.daily_rate(employee)
        return employee.salary_amount

    def total_allowances(self, employee, attendance_days):
        """Daily allowances scale with attended days; monthly ones are paid at face value."""
        total = Decimal('0')
        for allowance in employee.iter_allowances():
            if allowance.is_daily:
                total += allowance.amount * to_decimal(attendance_days)
            else:
                total += allowance.amount
        return total

    def general_bonus_value(self, employee, general_bonus_days, excluded_employee_ids=frozenset()):
        if employee.id in excluded_employee_ids:
            return Decimal('0')
        return to_decimal(general_bonus_days) * self.daily_rate(employee)


DEFAULT_POLICY = PayrollPolicy()
POLICY_KEYS = tuple(f.name for f in fields(PayrollPolicy))


def _parse_policy_value(key, raw, default):
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, TypeError, ValueError):
        logger.warning('Invalid pay policy value %s=%r, using %s', key, raw, default)
        return default
    if not value.is_finite() or value <= 0:
        logger.warning('Pay policy value %s=%r must be positive, using %s', key, raw, default)
        return default
    return value


def load_policy():
    """Resolve each policy key: SystemSetting row -> settings.PAYROLL_POLICY -> built-in default."""
    from django.conf import settings
    from .settings_utils import get_system_setting

    configured = getattr(settings, 'PAYROLL_POLICY', None) or {}
    values = {}
    for key in POLICY_KEYS:
        default = getattr(DEFAULT_POLICY, key)
        fallback = _parse_policy_value(key, configured.get(key, default), default)
        raw = get_system_setting(key, default=fallback)
        values[key] = _parse_policy_value(key, raw, fallback)
    return PayrollPolicy(**values)
