from django.core.management.base import BaseCommand

from payroll.policy import DEFAULT_POLICY
from payroll.models import SystemSetting


class Command(BaseCommand):
    help = 'Seed default pay policy system settings (existing values are kept)'

    def handle(self, *args, **options):
        defaults = [
            ('overtime_rate_weekday', 'Overtime multiplier on weekdays and Thursdays'),
            ('overtime_rate_rest_day', 'Overtime multiplier on rest days'),
            ('holiday_base_hours', 'Hours paid for a worked public holiday (monthly-paid)'),
            ('thursday_hours_head_office', 'Standard Thursday hours, head office'),
            ('thursday_hours_site', 'Standard Thursday hours, site staff'),
            ('monthly_rate_days', 'Days in a month for the daily rate of monthly salaries'),
            ('hourly_rate_divisor', 'Hours in a day for the hourly rate'),
        ]
        created_count = 0
        for key, desc in defaults:
            _, created = SystemSetting.objects.get_or_create(
                key=key, defaults={'value': str(getattr(DEFAULT_POLICY, key)), 'description': desc},
            )
            created_count += int(created)
        self.stdout.write(self.style.SUCCESS(f'Pay policy settings seeded ({created_count} new).'))
