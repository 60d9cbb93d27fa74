import pytest
from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError

from payroll.models import HistoricalPayroll, SystemSetting
from payroll.period_logic import current_period
from payroll.policy import POLICY_KEYS


@pytest.mark.django_db
def test_seed_payroll_settings_keeps_existing_values():
    SystemSetting.objects.create(key='holiday_base_hours', value='12')
    call_command('seed_payroll_settings', stdout=StringIO())
    assert set(SystemSetting.objects.values_list('key', flat=True)) == set(POLICY_KEYS)
    assert SystemSetting.objects.get(key='holiday_base_hours').value == '12'
    assert SystemSetting.objects.get(key='overtime_rate_weekday').value == '1.5'


@pytest.mark.django_db
def test_build_payroll_report_prints_totals_and_archives(office_data):
    out = StringIO()
    call_command('build_payroll_report', '3', '2025', stdout=out)
    assert 'Net salary' in out.getvalue()
    assert '3287.50' in out.getvalue()
    assert not HistoricalPayroll.objects.exists()

    call_command('build_payroll_report', '3', '2025', '--archive', stdout=StringIO())
    assert HistoricalPayroll.objects.filter(period='2025-03').exists()

    with pytest.raises(CommandError):
        call_command('build_payroll_report', '3', '2025', '--archive', stdout=StringIO())


@pytest.mark.django_db
def test_build_payroll_report_rejects_bad_month():
    with pytest.raises(CommandError):
        call_command('build_payroll_report', '13', '2025', stdout=StringIO())


@pytest.mark.django_db
def test_build_payroll_report_defaults_to_current_period():
    out = StringIO()
    call_command('build_payroll_report', stdout=out)
    assert f'Payroll {current_period().key}' in out.getvalue()
