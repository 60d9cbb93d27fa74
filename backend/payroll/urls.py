from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'employees', views.EmployeeViewSet, basename='employee')
router.register(r'holidays', views.HolidayViewSet, basename='holiday')
router.register(r'attendance', views.AttendanceViewSet, basename='attendance')
router.register(r'loans', views.LoanViewSet, basename='loan')
router.register(r'bonuses-deductions', views.BonusDeductionViewSet, basename='bonus-deduction')
router.register(r'drivers', views.DriverViewSet, basename='driver')
router.register(r'transport-attendance', views.TransportAttendanceViewSet, basename='transport-attendance')
router.register(r'driver-financials', views.DriverFinancialViewSet, basename='driver-financial')
router.register(r'settings', views.SystemSettingViewSet, basename='setting')
router.register(r'history', views.HistoricalPayrollViewSet, basename='history')

urlpatterns = [
    path('payroll/report/', views.PayrollReportView.as_view()),
    path('payroll/attendance-summary/', views.AttendanceSummaryView.as_view()),
    path('payroll/cost-distribution/', views.CostDistributionView.as_view()),
    path('payroll/settings/', views.PeriodSettingsView.as_view()),
    path('payroll/archive/', views.PayrollArchiveView.as_view()),
    path('transport/report/', views.TransportReportView.as_view()),
    path('transport/archive/', views.TransportArchiveView.as_view()),
    path('', include(router.urls)),
]
