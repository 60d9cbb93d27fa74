"""
Closing (archiving) a payroll period: the report snapshot is stored in HistoricalPayroll and the
period is served from the snapshot afterwards. Reopening deletes the snapshot row.
"""
import logging

from django.db import transaction

from .exceptions import PeriodClosedError
from .models import HistoricalPayroll
from .report_logic import report_to_dict, transport_report_to_dict

logger = logging.getLogger(__name__)


def get_archive(period):
    return HistoricalPayroll.objects.filter(period=period.key).first()


def is_period_closed(period):
    archive = get_archive(period)
    return archive is not None and bool(archive.report_data)


def archive_payroll(report):
    """Store the report snapshot for report.period. Raises PeriodClosedError if it is already closed."""
    period = report.period
    with transaction.atomic():
        archive, _ = HistoricalPayroll.objects.select_for_update().get_or_create(period=period.key)
        if archive.report_data:
            raise PeriodClosedError(period)
        archive.report_data = report_to_dict(report)
        archive.save()
    logger.info('Archived payroll %s (%s employees, net %s)', period, len(report.lines), report.totals.net_salary)
    return archive


def archive_transport_costs(transport_report):
    """Store (or replace) the transport snapshot on the period's archive row."""
    period = transport_report.period
    with transaction.atomic():
        archive, _ = HistoricalPayroll.objects.select_for_update().get_or_create(period=period.key)
        archive.transport_cost_data = transport_report_to_dict(transport_report)
        archive.save()
    logger.info('Archived transport costs %s (%s drivers)', period, len(transport_report.lines))
    return archive


def reopen_period(period):
    """Delete the period's archive row. Returns True if there was one."""
    with transaction.atomic():
        deleted, _ = HistoricalPayroll.objects.filter(period=period.key).delete()
    if deleted:
        logger.info('Reopened payroll period %s', period)
    return bool(deleted)
