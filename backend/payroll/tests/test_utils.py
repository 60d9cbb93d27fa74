import pytest
from decimal import Decimal

from payroll.utils import normalize_pay_basis, normalize_rest_days, normalize_weekday, to_decimal


@pytest.mark.parametrize('label, expected', [
    ('Friday', 'Friday'),
    ('  fri. ', 'Friday'),
    ('الجمعة', 'Friday'),
    ('السبت', 'Saturday'),
    ('الخميس', 'Thursday'),
    ('THURS', 'Thursday'),
    ('holiday', None),
    (None, None),
])
def test_normalize_weekday(label, expected):
    assert normalize_weekday(label) == expected


def test_normalize_pay_basis():
    assert normalize_pay_basis('شهري') == 'Monthly'
    assert normalize_pay_basis('يومي') == 'Daily'
    assert normalize_pay_basis('daily') == 'Daily'
    assert normalize_pay_basis('weekly') == 'Monthly'
    assert normalize_pay_basis('', default='Daily') == 'Daily'


def test_normalize_rest_days_drops_unknown_labels():
    assert normalize_rest_days(['الجمعة', 'Saturday', 'someday']) == frozenset({'Friday', 'Saturday'})
    assert normalize_rest_days(None) == frozenset()


def test_to_decimal():
    assert to_decimal('12.5') == Decimal('12.5')
    assert to_decimal(3) == Decimal('3')
    assert to_decimal(None) == Decimal('0')
    assert to_decimal('') == Decimal('0')
    assert to_decimal('abc') == Decimal('0')
    assert to_decimal('NaN') == Decimal('0')
    assert to_decimal('x', default=None) is None
