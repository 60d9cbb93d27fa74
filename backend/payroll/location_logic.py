"""
Per-location view of one employee's period: days worked at each location, and the employee's pay
split across those locations by share of days.

For every employee the per-location amounts add back up to the payroll report line
(base, allowances, additions, deductions, net).
"""
from dataclasses import dataclass, fields
from decimal import Decimal

from .attendance_logic import attended_hours, calculate_attendance_summary, get_attendance_entry
from .policy import DEFAULT_POLICY
from .utils import to_decimal

ZERO = Decimal('0')
ONE = Decimal('1')


@dataclass
class LocationCost:
    days: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    base_cost: Decimal = ZERO
    allowances_cost: Decimal = ZERO
    other_additions: Decimal = ZERO
    total_deductions: Decimal = ZERO
    net_cost: Decimal = ZERO

    def accumulate(self, other):
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self


def calculate_location_summary(employee, attendance_records, payroll_days):
    """{location: fractional days}. A day spent at n locations credits 1/n to each."""
    summary = {}
    for day in payroll_days:
        if attended_hours(attendance_records, day, employee.id) <= 0:
            continue
        entry = get_attendance_entry(attendance_records, day, employee.id)
        locations = entry.locations or (employee.default_location,)
        share = ONE / len(locations)
        for location in locations:
            summary[location] = summary.get(location, ZERO) + share
    return summary


def calculate_cost_distribution(employee, attendance_records, public_holidays, payroll_days,
                                bonus_deduction=None, excluded_employee_ids=frozenset(),
                                general_bonus_days=0, total_overtime_pay=None,
                                loan_installment=0, policy=None):
    """
    Split the employee's period pay across locations in proportion to days worked there.
    Returns {location: LocationCost}. total_overtime_pay is computed from attendance when not given.
    """
    policy = policy or DEFAULT_POLICY
    summary = calculate_attendance_summary(employee, attendance_records, public_holidays, payroll_days, policy)
    if total_overtime_pay is None:
        total_overtime_pay = summary.total_overtime_value
    total_overtime_pay = to_decimal(total_overtime_pay)
    loan_installment = to_decimal(loan_installment)
    manual_bonus = bonus_deduction.bonus_amount if bonus_deduction else ZERO
    manual_deduction = bonus_deduction.deduction_amount if bonus_deduction else ZERO
    general_bonus = policy.general_bonus_value(employee, general_bonus_days, excluded_employee_ids)

    location_summary = calculate_location_summary(employee, attendance_records, payroll_days)
    total_work_days = sum(location_summary.values(), ZERO)

    if total_work_days <= 0:
        # No attended days: everything owed for the period lands on the home location
        base_cost = policy.base_pay(employee, 0)
        allowances_cost = policy.total_allowances(employee, 0)
        other_additions = manual_bonus + general_bonus + total_overtime_pay
        total_deductions = manual_deduction + loan_installment
        return {
            employee.default_location: LocationCost(
                days=ZERO,
                overtime_hours=ZERO,
                base_cost=base_cost,
                allowances_cost=allowances_cost,
                other_additions=other_additions,
                total_deductions=total_deductions,
                net_cost=base_cost + allowances_cost + other_additions - total_deductions,
            )
        }

    daily_rate = policy.daily_rate(employee)
    distribution = {}
    for location, days in location_summary.items():
        ratio = days / total_work_days
        if employee.is_daily:
            base_cost = days * daily_rate
        else:
            base_cost = employee.salary_amount * ratio
        allowances_cost = ZERO
        for allowance in employee.iter_allowances():
            allowances_cost += allowance.amount * (days if allowance.is_daily else ratio)
        other_additions = (manual_bonus + general_bonus + total_overtime_pay) * ratio
        total_deductions = (manual_deduction + loan_installment) * ratio
        distribution[location] = LocationCost(
            days=days,
            overtime_hours=summary.total_raw_overtime_hours * ratio,
            base_cost=base_cost,
            allowances_cost=allowances_cost,
            other_additions=other_additions,
            total_deductions=total_deductions,
            net_cost=base_cost + allowances_cost + other_additions - total_deductions,
        )
    return distribution


def summarize_costs_by_location(distributions):
    """
    Roll up many employees' distributions ({location: LocationCost} each) into
    ({location: LocationCost}, grand_total LocationCost).
    """
    by_location = {}
    grand_total = LocationCost()
    for distribution in distributions:
        for location, cost in distribution.items():
            by_location.setdefault(location, LocationCost()).accumulate(cost)
            grand_total.accumulate(cost)
    return by_location, grand_total
