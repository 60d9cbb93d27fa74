"""
Build the payroll report for a period and print its totals; --archive closes the period.
Usage: python manage.py build_payroll_report                   # current period
       python manage.py build_payroll_report 3 2025            # period 2025-02-26 .. 2025-03-25
       python manage.py build_payroll_report 3 2025 --archive
"""
from django.core.management.base import BaseCommand, CommandError

from payroll.entities import PayrollPeriod
from payroll.exceptions import InvalidPeriodError, PeriodClosedError
from payroll.history_logic import archive_payroll, is_period_closed
from payroll.period_logic import current_period
from payroll.period_data import load_period_data
from payroll.report_logic import money


class Command(BaseCommand):
    help = 'Build the payroll report for a period and print totals. Args: [month year] [--archive]'

    def add_arguments(self, parser):
        parser.add_argument('month', type=int, nargs='?', help='Month (1-12); defaults to the current period')
        parser.add_argument('year', type=int, nargs='?', help='Year (e.g. 2025)')
        parser.add_argument('--archive', action='store_true', help='Store the report and close the period')

    def handle(self, *args, **options):
        if options['month'] is None or options['year'] is None:
            period = current_period()
        else:
            try:
                period = PayrollPeriod(options['year'], options['month'])
            except InvalidPeriodError as e:
                raise CommandError(str(e))
        if is_period_closed(period) and not options['archive']:
            self.stdout.write(self.style.WARNING(f'Period {period} is archived; showing live figures.'))

        report = load_period_data(period).build_report()
        totals = report.totals
        self.stdout.write(f'Payroll {period} ({period.start_date} to {period.end_date}), {len(report.lines)} employee(s)')
        for label, value in (
            ('Base pay', totals.base_pay),
            ('Overtime', totals.total_overtime_pay),
            ('Allowances', totals.total_allowances),
            ('Gross salary', totals.gross_salary),
            ('Additions', totals.total_additions),
            ('Deductions', totals.total_deductions),
            ('Net salary', totals.net_salary),
        ):
            self.stdout.write(f'  {label:<14} {money(value)}')

        if options['archive']:
            try:
                archive_payroll(report)
            except PeriodClosedError as e:
                raise CommandError(str(e))
            self.stdout.write(self.style.SUCCESS(f'Archived payroll period {period}.'))
