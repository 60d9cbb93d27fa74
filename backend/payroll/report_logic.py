"""
Payroll report for a period: one line per active employee (base pay, overtime, allowances, bonuses,
loan installment, deductions, net salary) plus period totals.
Transport report: one line per active driver (trip days x daily rate, extras, deductions).
report_to_dict / transport_report_to_dict give the JSON snapshot stored in HistoricalPayroll.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from .attendance_logic import AttendanceSummary, calculate_attendance_summary
from .entities import FINANCIAL_DEDUCTION, FINANCIAL_EXTRA, PayrollPeriod, PeriodSettings
from .loan_logic import resolve_loan_installment
from .location_logic import LocationCost, calculate_cost_distribution, summarize_costs_by_location
from .period_logic import get_payroll_days
from .policy import DEFAULT_POLICY
from .utils import to_decimal

ZERO = Decimal('0')
MONEY = Decimal('0.01')

LINE_MONEY_FIELDS = (
    'base_pay', 'total_overtime_pay', 'total_allowances', 'total_bonuses',
    'general_bonus', 'loan_installment', 'manual_deduction', 'net_salary',
)


def money(value):
    return to_decimal(value).quantize(MONEY, rounding=ROUND_HALF_UP)


def _money_str(value):
    return str(money(value))


@dataclass
class PayrollReportLine:
    employee_id: int
    name: str
    job_title: str
    work_location: str
    payment_source: str
    total_work_days: int
    base_pay: Decimal
    total_overtime_pay: Decimal
    total_allowances: Decimal
    total_bonuses: Decimal
    general_bonus: Decimal
    loan_installment: Decimal
    manual_deduction: Decimal
    net_salary: Decimal
    summary: Optional[AttendanceSummary] = field(default=None, compare=False, repr=False)


@dataclass
class PayrollTotals:
    total_work_days: int = 0
    base_pay: Decimal = ZERO
    total_overtime_pay: Decimal = ZERO
    total_allowances: Decimal = ZERO
    total_bonuses: Decimal = ZERO
    general_bonus: Decimal = ZERO
    loan_installment: Decimal = ZERO
    manual_deduction: Decimal = ZERO
    net_salary: Decimal = ZERO

    @property
    def gross_salary(self):
        return self.base_pay + self.total_overtime_pay + self.total_allowances

    @property
    def total_additions(self):
        return self.total_bonuses + self.general_bonus

    @property
    def total_deductions(self):
        return self.manual_deduction + self.loan_installment


@dataclass
class PayrollReport:
    period: PayrollPeriod
    lines: List[PayrollReportLine]
    totals: PayrollTotals
    period_settings: PeriodSettings = field(default_factory=PeriodSettings)


@dataclass
class CostAnalysis:
    distributions: Dict[int, Dict[str, LocationCost]]
    by_location: Dict[str, LocationCost]
    grand_total: LocationCost


def index_bonus_deductions(bonus_deductions, period=None):
    """{employee_id: BonusDeduction}, keeping only entries for period when they carry one."""
    if not bonus_deductions:
        return {}
    if isinstance(bonus_deductions, Mapping):
        return dict(bonus_deductions)
    index = {}
    for record in bonus_deductions:
        if period is not None and record.period is not None and record.period != period:
            continue
        index[record.employee_id] = record
    return index


def build_report_line(employee, period, attendance_records, public_holidays, payroll_days,
                      loans=(), bonus_deduction=None, period_settings=None, policy=None):
    policy = policy or DEFAULT_POLICY
    period_settings = period_settings or PeriodSettings()

    summary = calculate_attendance_summary(employee, attendance_records, public_holidays, payroll_days, policy)
    days = summary.actual_attendance_days
    base_pay = policy.base_pay(employee, days)
    total_overtime_pay = summary.total_overtime_value
    total_allowances = policy.total_allowances(employee, days)
    manual_bonus = bonus_deduction.bonus_amount if bonus_deduction else ZERO
    manual_deduction = bonus_deduction.deduction_amount if bonus_deduction else ZERO
    general_bonus = policy.general_bonus_value(
        employee, period_settings.general_bonus_days, period_settings.excluded_employee_ids,
    )
    loan_installment = resolve_loan_installment(employee.id, loans, period)
    net_salary = (
        base_pay + total_overtime_pay + total_allowances + manual_bonus + general_bonus
        - manual_deduction - loan_installment
    )
    return PayrollReportLine(
        employee_id=employee.id,
        name=employee.name,
        job_title=employee.job_title,
        work_location=employee.work_location,
        payment_source=employee.payment_source,
        total_work_days=days,
        base_pay=base_pay,
        total_overtime_pay=total_overtime_pay,
        total_allowances=total_allowances,
        total_bonuses=manual_bonus,
        general_bonus=general_bonus,
        loan_installment=loan_installment,
        manual_deduction=manual_deduction,
        net_salary=net_salary,
        summary=summary,
    )


def calculate_totals(lines):
    totals = PayrollTotals()
    for line in lines:
        totals.total_work_days += line.total_work_days
        for name in LINE_MONEY_FIELDS:
            setattr(totals, name, getattr(totals, name) + getattr(line, name))
    return totals


def build_payroll_report(period, employees, attendance_records, public_holidays, loans=(),
                         bonus_deductions=(), period_settings=None, policy=None):
    """Report lines for every active employee in the period, plus totals."""
    period_settings = period_settings or PeriodSettings()
    payroll_days = get_payroll_days(period.year, period.month)
    bonus_index = index_bonus_deductions(bonus_deductions, period)
    lines = [
        build_report_line(
            employee, period, attendance_records, public_holidays, payroll_days,
            loans=loans,
            bonus_deduction=bonus_index.get(employee.id),
            period_settings=period_settings,
            policy=policy,
        )
        for employee in employees
        if employee.is_active
    ]
    return PayrollReport(period=period, lines=lines, totals=calculate_totals(lines), period_settings=period_settings)


def build_cost_analysis(report, employees, attendance_records, public_holidays, bonus_deductions=(), policy=None):
    """Per-employee location distribution for every report line, plus the roll-up by location."""
    payroll_days = get_payroll_days(report.period.year, report.period.month)
    employees_by_id = {employee.id: employee for employee in employees}
    bonus_index = index_bonus_deductions(bonus_deductions, report.period)
    settings = report.period_settings
    distributions = {}
    for line in report.lines:
        employee = employees_by_id.get(line.employee_id)
        if employee is None:
            continue
        distributions[line.employee_id] = calculate_cost_distribution(
            employee, attendance_records, public_holidays, payroll_days,
            bonus_deduction=bonus_index.get(employee.id),
            excluded_employee_ids=settings.excluded_employee_ids,
            general_bonus_days=settings.general_bonus_days,
            total_overtime_pay=line.total_overtime_pay,
            loan_installment=line.loan_installment,
            policy=policy,
        )
    by_location, grand_total = summarize_costs_by_location(distributions.values())
    return CostAnalysis(distributions=distributions, by_location=by_location, grand_total=grand_total)


# ---------- Transport (drivers / vehicles) ----------

@dataclass
class TransportReportLine:
    driver_id: int
    driver_name: str
    work_location: str
    payment_source: str
    day_cost: Decimal
    total_days: Decimal
    base_cost: Decimal
    extras_total: Decimal
    deductions_total: Decimal
    total_cost: Decimal


@dataclass
class TransportTotals:
    total_days: Decimal = ZERO
    base_cost: Decimal = ZERO
    extras_total: Decimal = ZERO
    deductions_total: Decimal = ZERO
    total_cost: Decimal = ZERO


@dataclass
class TransportReport:
    period: PayrollPeriod
    lines: List[TransportReportLine]
    totals: TransportTotals


def build_transport_report(period, drivers, trips, financials=()):
    """
    trips: {driver_id: {date: trips}}; only days inside the payroll period count.
    financials: DriverFinancial entries for the period (extras add, deductions subtract).
    """
    period_days = set(get_payroll_days(period.year, period.month))
    lines = []
    totals = TransportTotals()
    for driver in drivers:
        if not driver.is_active:
            continue
        driver_trips = trips.get(driver.id) or {}
        total_days = sum(
            (max(to_decimal(count), ZERO) for day, count in driver_trips.items() if day in period_days),
            ZERO,
        )
        own = [f for f in financials if f.driver_id == driver.id]
        extras_total = sum((f.amount for f in own if f.kind == FINANCIAL_EXTRA), ZERO)
        deductions_total = sum((f.amount for f in own if f.kind == FINANCIAL_DEDUCTION), ZERO)
        base_cost = total_days * driver.daily_rate
        line = TransportReportLine(
            driver_id=driver.id,
            driver_name=driver.name,
            work_location=driver.work_location,
            payment_source=driver.payment_source,
            day_cost=driver.daily_rate,
            total_days=total_days,
            base_cost=base_cost,
            extras_total=extras_total,
            deductions_total=deductions_total,
            total_cost=base_cost + extras_total - deductions_total,
        )
        lines.append(line)
        totals.total_days += line.total_days
        totals.base_cost += line.base_cost
        totals.extras_total += line.extras_total
        totals.deductions_total += line.deductions_total
        totals.total_cost += line.total_cost
    return TransportReport(period=period, lines=lines, totals=totals)


# ---------- JSON snapshots ----------

def _bucket_dict(bucket):
    return {'raw_hours': str(bucket.raw_hours), 'calculated_value': _money_str(bucket.calculated_value)}


def summary_to_dict(summary):
    return {
        'actual_attendance_days': summary.actual_attendance_days,
        'weekday_overtime': _bucket_dict(summary.weekday_overtime),
        'thursday_overtime': _bucket_dict(summary.thursday_overtime),
        'rest_day_overtime': _bucket_dict(summary.rest_day_overtime),
        'holiday_overtime': _bucket_dict(summary.holiday_overtime),
        'total_overtime_value': _money_str(summary.total_overtime_value),
        'total_raw_overtime_hours': str(summary.total_raw_overtime_hours),
    }


def location_cost_to_dict(cost):
    return {
        'days': str(cost.days.quantize(MONEY, rounding=ROUND_HALF_UP)),
        'overtime_hours': str(cost.overtime_hours.quantize(MONEY, rounding=ROUND_HALF_UP)),
        'base_cost': _money_str(cost.base_cost),
        'allowances_cost': _money_str(cost.allowances_cost),
        'other_additions': _money_str(cost.other_additions),
        'total_deductions': _money_str(cost.total_deductions),
        'net_cost': _money_str(cost.net_cost),
    }


def report_line_to_dict(line):
    data = {
        'employee': {
            'id': line.employee_id,
            'name': line.name,
            'job_title': line.job_title,
            'work_location': line.work_location,
            'payment_source': line.payment_source,
        },
        'total_work_days': line.total_work_days,
    }
    for name in LINE_MONEY_FIELDS:
        data[name] = _money_str(getattr(line, name))
    if line.summary is not None:
        data['overtime'] = summary_to_dict(line.summary)
    return data


def totals_to_dict(totals):
    data = {'total_work_days': totals.total_work_days}
    for name in LINE_MONEY_FIELDS:
        data[name] = _money_str(getattr(totals, name))
    data['gross_salary'] = _money_str(totals.gross_salary)
    data['total_additions'] = _money_str(totals.total_additions)
    data['total_deductions'] = _money_str(totals.total_deductions)
    return data


def report_to_dict(report):
    return {
        'period': report.period.key,
        'general_bonus_days': _money_str(report.period_settings.general_bonus_days),
        'excluded_employee_ids': sorted(report.period_settings.excluded_employee_ids),
        'report': [report_line_to_dict(line) for line in report.lines],
        'totals': totals_to_dict(report.totals),
    }


def cost_analysis_to_dict(analysis, report):
    names = {line.employee_id: line.name for line in report.lines}
    net_salaries = {line.employee_id: line.net_salary for line in report.lines}
    return {
        'period': report.period.key,
        'employees': [
            {
                'employee_id': employee_id,
                'name': names.get(employee_id, ''),
                'net_salary': _money_str(net_salaries.get(employee_id, ZERO)),
                'distribution': {loc: location_cost_to_dict(cost) for loc, cost in distribution.items()},
            }
            for employee_id, distribution in analysis.distributions.items()
        ],
        'by_location': {loc: location_cost_to_dict(cost) for loc, cost in analysis.by_location.items()},
        'grand_total': location_cost_to_dict(analysis.grand_total),
    }


def transport_report_to_dict(report):
    return {
        'period': report.period.key,
        'report': [
            {
                'driver_id': line.driver_id,
                'driver_name': line.driver_name,
                'work_location': line.work_location,
                'payment_source': line.payment_source,
                'day_cost': _money_str(line.day_cost),
                'total_days': str(line.total_days),
                'base_cost': _money_str(line.base_cost),
                'extras_total': _money_str(line.extras_total),
                'deductions_total': _money_str(line.deductions_total),
                'total_cost': _money_str(line.total_cost),
            }
            for line in report.lines
        ],
        'totals': {
            'total_days': str(report.totals.total_days),
            'base_cost': _money_str(report.totals.base_cost),
            'extras_total': _money_str(report.totals.extras_total),
            'deductions_total': _money_str(report.totals.deductions_total),
            'total_cost': _money_str(report.totals.total_cost),
        },
    }
