from rest_framework import viewsets
from rest_framework.views import APIView
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Q

from .models import (
    Employee, Holiday, Attendance, Loan, BonusDeduction, HistoricalPayroll,
    Driver, TransportAttendance, DriverFinancial, SystemSetting,
)
from .serializers import (
    EmployeeSerializer, HolidaySerializer, AttendanceSerializer, LoanSerializer,
    BonusDeductionSerializer, HistoricalPayrollSerializer, DriverSerializer,
    TransportAttendanceSerializer, DriverFinancialSerializer, SystemSettingSerializer,
    PeriodQuerySerializer, PeriodSettingsUpdateSerializer,
)
from .entities import PayrollPeriod
from .exceptions import InvalidPeriodError, PeriodClosedError
from .history_logic import (
    archive_payroll, archive_transport_costs, get_archive, is_period_closed, reopen_period,
)
from .location_logic import calculate_location_summary
from .attendance_logic import calculate_attendance_summary
from .period_data import load_period_data, load_period_settings, load_transport_data, save_period_settings
from .period_logic import get_payroll_days
from .report_logic import (
    cost_analysis_to_dict, money, report_to_dict, summary_to_dict, transport_report_to_dict,
)


# ---------- Period parameters ----------
def parse_period(params):
    """(PayrollPeriod, None) from year/month in params, or (None, 400 Response)."""
    ser = PeriodQuerySerializer(data={k: params.get(k) for k in ('year', 'month', 'employee_id') if params.get(k) not in (None, '')})
    if not ser.is_valid():
        if 'year' in ser.errors or 'month' in ser.errors:
            return None, Response({'error': 'valid year and month required', 'details': ser.errors}, status=400)
        return None, Response({'error': 'invalid parameters', 'details': ser.errors}, status=400)
    try:
        return ser.to_period(), None
    except InvalidPeriodError as e:
        return None, Response({'error': str(e)}, status=400)


def _period_filter(qs, params, field='date'):
    """Narrow a dated queryset to ?year=&month= (the payroll period) when both are given."""
    year, month = params.get('year'), params.get('month')
    if not year or not month:
        return qs
    try:
        period = PayrollPeriod(year, month)
    except InvalidPeriodError:
        return qs.none()
    return qs.filter(**{f'{field}__gte': period.start_date, f'{field}__lte': period.end_date})


# ---------- CRUD ----------
class EmployeeViewSet(viewsets.ModelViewSet):
    queryset = Employee.objects.all()
    serializer_class = EmployeeSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['salary_type', 'work_location', 'payment_source', 'is_active', 'is_head_office']

    def get_queryset(self):
        qs = super().get_queryset()
        search = self.request.query_params.get('search', '').strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(job_title__icontains=search))
        return qs


class HolidayViewSet(viewsets.ModelViewSet):
    queryset = Holiday.objects.all()
    serializer_class = HolidaySerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['year']


class AttendanceViewSet(viewsets.ModelViewSet):
    queryset = Attendance.objects.select_related('employee')
    serializer_class = AttendanceSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['employee', 'date', 'location']

    def get_queryset(self):
        return _period_filter(super().get_queryset(), self.request.query_params)


class LoanViewSet(viewsets.ModelViewSet):
    queryset = Loan.objects.all()
    serializer_class = LoanSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['employee']


class BonusDeductionViewSet(viewsets.ModelViewSet):
    queryset = BonusDeduction.objects.all()
    serializer_class = BonusDeductionSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['employee', 'period']


class DriverViewSet(viewsets.ModelViewSet):
    queryset = Driver.objects.all()
    serializer_class = DriverSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['is_active', 'work_location']


class TransportAttendanceViewSet(viewsets.ModelViewSet):
    queryset = TransportAttendance.objects.all()
    serializer_class = TransportAttendanceSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['driver', 'date']

    def get_queryset(self):
        return _period_filter(super().get_queryset(), self.request.query_params)


class DriverFinancialViewSet(viewsets.ModelViewSet):
    queryset = DriverFinancial.objects.all()
    serializer_class = DriverFinancialSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['driver', 'period', 'type']


class SystemSettingViewSet(viewsets.ModelViewSet):
    queryset = SystemSetting.objects.all()
    serializer_class = SystemSettingSerializer
    lookup_field = 'key'
    lookup_url_kwarg = 'key'


class HistoricalPayrollViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = HistoricalPayroll.objects.all()
    serializer_class = HistoricalPayrollSerializer
    lookup_field = 'period'
    lookup_url_kwarg = 'period'


# ---------- Payroll ----------
class PayrollReportView(APIView):
    """GET ?year=&month=: report lines + totals. Closed periods are served from the archived snapshot."""
    def get(self, request):
        period, error = parse_period(request.query_params)
        if error:
            return error
        archive = get_archive(period)
        if archive is not None and archive.report_data:
            return Response({**archive.report_data, 'is_closed': True})
        report = load_period_data(period).build_report()
        return Response({**report_to_dict(report), 'is_closed': False})


class AttendanceSummaryView(APIView):
    """GET ?year=&month=[&employee_id=]: attended days, overtime buckets and days per location."""
    def get(self, request):
        period, error = parse_period(request.query_params)
        if error:
            return error
        data = load_period_data(period)
        payroll_days = get_payroll_days(period.year, period.month)
        employee_id = request.query_params.get('employee_id')
        employees = [e for e in data.employees if e.is_active]
        if employee_id:
            employees = [e for e in employees if str(e.id) == str(employee_id)]
            if not employees:
                return Response({'error': 'Employee not found'}, status=404)
        rows = []
        for employee in employees:
            summary = calculate_attendance_summary(employee, data.attendance, data.holidays, payroll_days, data.policy)
            locations = calculate_location_summary(employee, data.attendance, payroll_days)
            rows.append({
                'employee_id': employee.id,
                'name': employee.name,
                'summary': summary_to_dict(summary),
                'locations': {loc: str(round(days, 2)) for loc, days in locations.items()},
            })
        return Response({'period': period.key, 'results': rows})


class CostDistributionView(APIView):
    """GET ?year=&month=: each employee's pay split by location, plus the per-location roll-up."""
    def get(self, request):
        period, error = parse_period(request.query_params)
        if error:
            return error
        data = load_period_data(period)
        report = data.build_report()
        analysis = data.build_cost_analysis(report)
        return Response(cost_analysis_to_dict(analysis, report))


class PeriodSettingsView(APIView):
    """GET/PATCH ?year=&month=: general bonus days and excluded employees for the period."""
    def get(self, request):
        period, error = parse_period(request.query_params)
        if error:
            return error
        return Response(_settings_payload(period, load_period_settings(period)))

    def patch(self, request):
        period, error = parse_period(request.query_params)
        if error:
            return error
        if is_period_closed(period):
            return Response({'error': f'Payroll period {period} is closed'}, status=409)
        ser = PeriodSettingsUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        settings = save_period_settings(
            period,
            general_bonus_days=ser.validated_data.get('general_bonus_days'),
            excluded_employee_ids=ser.validated_data.get('excluded_employee_ids'),
        )
        return Response(_settings_payload(period, settings))


def _settings_payload(period, settings):
    return {
        'period': period.key,
        'general_bonus_days': str(money(settings.general_bonus_days)),
        'excluded_employee_ids': sorted(settings.excluded_employee_ids),
    }


class PayrollArchiveView(APIView):
    """POST {year, month}: close the period (snapshot the report). DELETE ?year=&month=: reopen it."""
    def post(self, request):
        period, error = parse_period(request.data)
        if error:
            return error
        if is_period_closed(period):
            return Response({'error': f'Payroll period {period} is already archived'}, status=409)
        report = load_period_data(period).build_report()
        try:
            archive = archive_payroll(report)
        except PeriodClosedError as e:
            return Response({'error': str(e)}, status=409)
        return Response(HistoricalPayrollSerializer(archive).data, status=201)

    def delete(self, request):
        period, error = parse_period(request.query_params if request.query_params else request.data)
        if error:
            return error
        if not reopen_period(period):
            return Response({'error': f'Payroll period {period} is not archived'}, status=404)
        return Response(status=204)


# ---------- Transport ----------
class TransportReportView(APIView):
    """GET ?year=&month=: driver costs for the period (archived snapshot when one exists)."""
    def get(self, request):
        period, error = parse_period(request.query_params)
        if error:
            return error
        archive = get_archive(period)
        if archive is not None and archive.transport_cost_data:
            return Response({**archive.transport_cost_data, 'is_closed': True})
        report = load_transport_data(period).build_report()
        return Response({**transport_report_to_dict(report), 'is_closed': False})


class TransportArchiveView(APIView):
    """POST {year, month}: store (or replace) the transport cost snapshot."""
    def post(self, request):
        period, error = parse_period(request.data)
        if error:
            return error
        report = load_transport_data(period).build_report()
        archive = archive_transport_costs(report)
        return Response(HistoricalPayrollSerializer(archive).data, status=201)
