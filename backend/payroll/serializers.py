from decimal import Decimal

from rest_framework import serializers
from .models import (
    Employee, Holiday, Attendance, Loan, BonusDeduction,
    HistoricalPayroll, Driver, TransportAttendance, DriverFinancial, SystemSetting,
)
from .entities import PayrollPeriod
from .exceptions import InvalidPeriodError
from .utils import normalize_rest_days, normalize_weekday


def validate_period_key(value):
    try:
        return PayrollPeriod.from_key(value).key
    except InvalidPeriodError:
        raise serializers.ValidationError('Period must be YYYY-MM.')


class EmployeeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Employee
        fields = [
            'id', 'name', 'job_title', 'work_location', 'payment_source',
            'salary_type', 'salary_amount', 'rest_days', 'hours_per_day', 'is_head_office',
            'transport_allowance', 'transport_allowance_type',
            'expatriation_allowance', 'expatriation_allowance_type',
            'meal_allowance', 'meal_allowance_type',
            'housing_allowance', 'housing_allowance_type',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['created_at', 'updated_at']

    def validate_rest_days(self, value):
        """Accept English or Arabic labels; store canonical English names."""
        if not isinstance(value, (list, tuple)):
            raise serializers.ValidationError('rest_days must be a list of weekday names.')
        unknown = [v for v in value if normalize_weekday(v) is None]
        if unknown:
            raise serializers.ValidationError(f'Unknown weekday(s): {", ".join(map(str, unknown))}')
        return sorted(normalize_rest_days(value))

    def validate_salary_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('salary_amount must be positive.')
        return value

    def validate_hours_per_day(self, value):
        if value <= 0:
            raise serializers.ValidationError('hours_per_day must be positive.')
        return value


class HolidaySerializer(serializers.ModelSerializer):
    class Meta:
        model = Holiday
        fields = ['id', 'date', 'name', 'year', 'created_at']
        read_only_fields = ['year', 'created_at']


class AttendanceSerializer(serializers.ModelSerializer):
    employee_name = serializers.CharField(source='employee.name', read_only=True)

    class Meta:
        model = Attendance
        fields = ['id', 'employee', 'employee_name', 'date', 'hours', 'location', 'created_at']
        read_only_fields = ['created_at']

    def validate_hours(self, value):
        if value < 0:
            raise serializers.ValidationError('hours cannot be negative.')
        return value


class LoanSerializer(serializers.ModelSerializer):
    installment_amount = serializers.SerializerMethodField()
    end_period = serializers.SerializerMethodField()

    class Meta:
        model = Loan
        fields = [
            'id', 'employee', 'total_amount', 'installments', 'start_year', 'start_month',
            'description', 'installment_amount', 'end_period', 'created_at',
        ]
        read_only_fields = ['created_at']

    def validate_installments(self, value):
        if value < 1:
            raise serializers.ValidationError('installments must be at least 1.')
        return value

    def validate_start_month(self, value):
        if not 1 <= value <= 12:
            raise serializers.ValidationError('start_month must be 1-12.')
        return value

    def get_installment_amount(self, obj):
        return str(round(obj.total_amount / obj.installments, 2)) if obj.installments else '0.00'

    def get_end_period(self, obj):
        if not obj.installments:
            return None
        return PayrollPeriod(obj.start_year, obj.start_month).shift(obj.installments - 1).key


class BonusDeductionSerializer(serializers.ModelSerializer):
    class Meta:
        model = BonusDeduction
        fields = ['id', 'employee', 'period', 'bonus_amount', 'deduction_amount', 'notes', 'updated_at']
        read_only_fields = ['updated_at']

    def validate_period(self, value):
        return validate_period_key(value)

    def validate(self, attrs):
        for name in ('bonus_amount', 'deduction_amount'):
            if attrs.get(name) is not None and attrs[name] < 0:
                raise serializers.ValidationError({name: 'Must not be negative.'})
        return attrs


class HistoricalPayrollSerializer(serializers.ModelSerializer):
    class Meta:
        model = HistoricalPayroll
        fields = ['id', 'period', 'report_data', 'transport_cost_data', 'created_at', 'updated_at']
        read_only_fields = fields


class DriverSerializer(serializers.ModelSerializer):
    class Meta:
        model = Driver
        fields = ['id', 'name', 'daily_rate', 'work_location', 'payment_source', 'is_active', 'created_at']
        read_only_fields = ['created_at']


class TransportAttendanceSerializer(serializers.ModelSerializer):
    class Meta:
        model = TransportAttendance
        fields = ['id', 'driver', 'date', 'trips']


class DriverFinancialSerializer(serializers.ModelSerializer):
    class Meta:
        model = DriverFinancial
        fields = ['id', 'driver', 'period', 'type', 'amount', 'description', 'created_at']
        read_only_fields = ['created_at']

    def validate_period(self, value):
        return validate_period_key(value)


class SystemSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = SystemSetting
        fields = ['id', 'key', 'value', 'description', 'updated_at']


class PeriodQuerySerializer(serializers.Serializer):
    """?year=&month= on report endpoints (also accepted in POST bodies)."""
    year = serializers.IntegerField(min_value=1, max_value=9999)
    month = serializers.IntegerField(min_value=1, max_value=12)
    employee_id = serializers.IntegerField(required=False)

    def to_period(self):
        return PayrollPeriod(self.validated_data['year'], self.validated_data['month'])


class PeriodSettingsUpdateSerializer(serializers.Serializer):
    general_bonus_days = serializers.DecimalField(max_digits=5, decimal_places=2, min_value=Decimal('0'), required=False)
    excluded_employee_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
