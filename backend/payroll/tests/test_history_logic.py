import pytest

from payroll.entities import PayrollPeriod
from payroll.exceptions import PeriodClosedError
from payroll.history_logic import archive_payroll, archive_transport_costs, is_period_closed, reopen_period
from payroll.models import HistoricalPayroll
from payroll.period_data import load_period_data, load_transport_data

PERIOD = PayrollPeriod(2025, 3)


@pytest.mark.django_db
def test_archive_and_reopen(office_data):
    report = load_period_data(PERIOD).build_report()
    assert not is_period_closed(PERIOD)

    archive = archive_payroll(report)
    assert is_period_closed(PERIOD)
    assert archive.report_data['totals']['net_salary'] == '3287.50'
    assert archive.report_data['report'][0]['employee']['name'] == 'Employee X'

    with pytest.raises(PeriodClosedError):
        archive_payroll(report)

    assert reopen_period(PERIOD) is True
    assert not is_period_closed(PERIOD)
    assert reopen_period(PERIOD) is False


@pytest.mark.django_db
def test_transport_snapshot_shares_the_period_row(office_data):
    archive_transport_costs(load_transport_data(PERIOD).build_report())
    # transport snapshot alone does not close the payroll
    assert not is_period_closed(PERIOD)
    archive_payroll(load_period_data(PERIOD).build_report())
    archive_transport_costs(load_transport_data(PERIOD).build_report())
    row = HistoricalPayroll.objects.get(period='2025-03')
    assert row.report_data is not None
    assert row.transport_cost_data['period'] == '2025-03'
    assert HistoricalPayroll.objects.count() == 1
