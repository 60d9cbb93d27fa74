from django.contrib import admin
from .models import (
    Employee, Holiday, Attendance, Loan, BonusDeduction, PayrollSettings,
    HistoricalPayroll, Driver, TransportAttendance, DriverFinancial, SystemSetting,
)


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'job_title', 'work_location', 'salary_type', 'salary_amount', 'is_head_office', 'is_active')
    list_filter = ('salary_type', 'is_head_office', 'is_active', 'work_location')
    search_fields = ('name', 'job_title')


@admin.register(Holiday)
class HolidayAdmin(admin.ModelAdmin):
    list_display = ('date', 'name', 'year')
    list_filter = ('year',)


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ('employee', 'date', 'hours', 'location')
    list_filter = ('date', 'location')
    search_fields = ('employee__name', 'location')


@admin.register(Loan)
class LoanAdmin(admin.ModelAdmin):
    list_display = ('employee', 'total_amount', 'installments', 'start_year', 'start_month', 'description')
    list_filter = ('start_year',)


@admin.register(BonusDeduction)
class BonusDeductionAdmin(admin.ModelAdmin):
    list_display = ('employee', 'period', 'bonus_amount', 'deduction_amount', 'notes')
    list_filter = ('period',)


@admin.register(PayrollSettings)
class PayrollSettingsAdmin(admin.ModelAdmin):
    list_display = ('period', 'general_bonus_days', 'excluded_employee_ids', 'updated_at')


@admin.register(HistoricalPayroll)
class HistoricalPayrollAdmin(admin.ModelAdmin):
    list_display = ('period', 'created_at', 'updated_at')
    readonly_fields = ('report_data', 'transport_cost_data')


@admin.register(Driver)
class DriverAdmin(admin.ModelAdmin):
    list_display = ('name', 'daily_rate', 'work_location', 'payment_source', 'is_active')
    list_filter = ('is_active',)


@admin.register(TransportAttendance)
class TransportAttendanceAdmin(admin.ModelAdmin):
    list_display = ('driver', 'date', 'trips')
    list_filter = ('date',)


@admin.register(DriverFinancial)
class DriverFinancialAdmin(admin.ModelAdmin):
    list_display = ('driver', 'period', 'type', 'amount', 'description')
    list_filter = ('period', 'type')


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ('key', 'value', 'description', 'updated_at')
