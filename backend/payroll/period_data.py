"""
Load everything one payroll period needs from the database and convert it to entities.
This is the only place ORM rows become calculation inputs; free-form labels (weekday names,
pay types) are normalized here and malformed rows are skipped with a warning.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List

from .attendance_logic import merge_attendance_rows
from .entities import (
    ALLOWANCE_KINDS, Allowance, BonusDeduction, Driver, DriverFinancial, Employee, Loan,
    PayrollPeriod, PeriodSettings, PublicHoliday,
)
from .exceptions import InvalidPeriodError
from .models import (
    Attendance, BonusDeduction as BonusDeductionModel, Driver as DriverModel,
    DriverFinancial as DriverFinancialModel, Employee as EmployeeModel, Holiday,
    Loan as LoanModel, PayrollSettings, TransportAttendance,
)
from .policy import PayrollPolicy, load_policy
from .report_logic import build_cost_analysis, build_payroll_report, build_transport_report
from .utils import normalize_pay_basis, normalize_rest_days, to_decimal

logger = logging.getLogger(__name__)


@dataclass
class PeriodData:
    period: PayrollPeriod
    employees: List[Employee]
    attendance: Dict
    holidays: List[PublicHoliday]
    loans: List[Loan]
    bonus_deductions: Dict[int, BonusDeduction]
    settings: PeriodSettings
    policy: PayrollPolicy = field(default_factory=PayrollPolicy)

    def build_report(self):
        return build_payroll_report(
            self.period, self.employees, self.attendance, self.holidays,
            loans=self.loans,
            bonus_deductions=self.bonus_deductions,
            period_settings=self.settings,
            policy=self.policy,
        )

    def build_cost_analysis(self, report=None):
        report = report or self.build_report()
        return build_cost_analysis(
            report, self.employees, self.attendance, self.holidays,
            bonus_deductions=self.bonus_deductions,
            policy=self.policy,
        )


@dataclass
class TransportData:
    period: PayrollPeriod
    drivers: List[Driver]
    trips: Dict
    financials: List[DriverFinancial]

    def build_report(self):
        return build_transport_report(self.period, self.drivers, self.trips, self.financials)


def employee_to_entity(obj):
    allowances = {}
    for kind in ALLOWANCE_KINDS:
        amount = to_decimal(getattr(obj, f'{kind}_allowance', None))
        if amount > 0:
            allowances[kind] = Allowance(amount, normalize_pay_basis(getattr(obj, f'{kind}_allowance_type', '')))
    return Employee(
        id=obj.pk,
        name=obj.name,
        job_title=obj.job_title or '',
        work_location=(obj.work_location or '').strip(),
        payment_source=obj.payment_source or '',
        salary_type=normalize_pay_basis(obj.salary_type),
        salary_amount=obj.salary_amount,
        rest_days=normalize_rest_days(obj.rest_days if isinstance(obj.rest_days, (list, tuple)) else []),
        hours_per_day=obj.hours_per_day,
        is_head_office=bool(obj.is_head_office),
        allowances=allowances,
        is_active=bool(obj.is_active),
    )


def load_employees():
    return [employee_to_entity(obj) for obj in EmployeeModel.objects.order_by('id')]


def load_holidays(period):
    qs = Holiday.objects.filter(date__gte=period.start_date, date__lte=period.end_date)
    return [PublicHoliday(date=h.date, name=h.name) for h in qs]


def load_attendance(period):
    rows = Attendance.objects.filter(
        date__gte=period.start_date, date__lte=period.end_date,
    ).order_by('date', 'id').values('date', 'employee_id', 'hours', 'location')
    return merge_attendance_rows(rows)


def load_loans():
    loans = []
    for obj in LoanModel.objects.all():
        try:
            start = PayrollPeriod(obj.start_year, obj.start_month)
        except InvalidPeriodError:
            logger.warning('Skipping loan %s with invalid start %s-%s', obj.pk, obj.start_year, obj.start_month)
            continue
        loans.append(Loan(
            id=obj.pk,
            employee_id=obj.employee_id,
            total_amount=obj.total_amount,
            installments=obj.installments,
            start=start,
            description=obj.description,
        ))
    return loans


def load_bonus_deductions(period):
    """{employee_id: BonusDeduction} for the period."""
    result = {}
    for obj in BonusDeductionModel.objects.filter(period=period.key):
        result[obj.employee_id] = BonusDeduction(
            employee_id=obj.employee_id,
            period=period,
            bonus_amount=obj.bonus_amount,
            deduction_amount=obj.deduction_amount,
            notes=obj.notes,
        )
    return result


def load_period_settings(period):
    obj = PayrollSettings.objects.filter(period=period.key).first()
    if obj is None:
        return PeriodSettings()
    excluded = []
    for value in obj.excluded_employee_ids or []:
        try:
            excluded.append(int(value))
        except (TypeError, ValueError):
            logger.warning('Ignoring invalid excluded employee id %r in %s settings', value, period)
    return PeriodSettings(general_bonus_days=obj.general_bonus_days, excluded_employee_ids=excluded)


def save_period_settings(period, general_bonus_days=None, excluded_employee_ids=None):
    """Update only the fields given; returns the stored PeriodSettings."""
    obj, _ = PayrollSettings.objects.get_or_create(period=period.key)
    if general_bonus_days is not None:
        obj.general_bonus_days = general_bonus_days
    if excluded_employee_ids is not None:
        obj.excluded_employee_ids = sorted({int(v) for v in excluded_employee_ids})
    obj.save()
    return load_period_settings(period)


def load_period_data(period, policy=None):
    """Snapshot of everything the payroll engine needs for one period."""
    return PeriodData(
        period=period,
        employees=load_employees(),
        attendance=load_attendance(period),
        holidays=load_holidays(period),
        loans=load_loans(),
        bonus_deductions=load_bonus_deductions(period),
        settings=load_period_settings(period),
        policy=policy or load_policy(),
    )


def load_transport_data(period):
    drivers = [
        Driver(
            id=obj.pk,
            name=obj.name,
            daily_rate=obj.daily_rate,
            work_location=obj.work_location,
            payment_source=obj.payment_source,
            is_active=obj.is_active,
        )
        for obj in DriverModel.objects.all()
    ]
    trips = {}
    for row in TransportAttendance.objects.filter(
        date__gte=period.start_date, date__lte=period.end_date,
    ).values('driver_id', 'date', 'trips'):
        trips.setdefault(row['driver_id'], {})[row['date']] = row['trips']
    financials = [
        DriverFinancial(driver_id=obj.driver_id, kind=obj.type, amount=obj.amount, description=obj.description)
        for obj in DriverFinancialModel.objects.filter(period=period.key)
    ]
    return TransportData(period=period, drivers=drivers, trips=trips, financials=financials)
