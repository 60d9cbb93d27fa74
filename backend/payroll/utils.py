"""
Utility: normalize free-form labels entered by users (weekday names, pay types, frequencies)
to canonical values. Handles case, stray punctuation and Arabic spellings
(e.g. "Friday", "fri.", "الجمعة" are the same day).
"""
import logging
import re
from decimal import Decimal, InvalidOperation

logger = logging.getLogger(__name__)


def normalize_label(s):
    if s is None or not isinstance(s, str):
        return ""
    # Strip, lowercase, remove * / . and collapse spaces
    s = str(s).strip().lower()
    s = re.sub(r'[\*\/\.]+', '', s)
    s = re.sub(r'\s+', ' ', s).strip()
    return s


# Canonical weekday name -> accepted spellings (English + Arabic, with and without hamza)
WEEKDAY_ALIASES = {
    'Sunday': ['sunday', 'sun', 'الأحد', 'الاحد'],
    'Monday': ['monday', 'mon', 'الإثنين', 'الاثنين'],
    'Tuesday': ['tuesday', 'tue', 'tues', 'الثلاثاء'],
    'Wednesday': ['wednesday', 'wed', 'الأربعاء', 'الاربعاء'],
    'Thursday': ['thursday', 'thu', 'thurs', 'الخميس'],
    'Friday': ['friday', 'fri', 'الجمعة'],
    'Saturday': ['saturday', 'sat', 'السبت'],
}

# Salary type and allowance frequency share the same two values
PAY_BASIS_ALIASES = {
    'Monthly': ['monthly', 'month', 'شهري'],
    'Daily': ['daily', 'day', 'يومي'],
}


def _build_lookup(alias_dict):
    lookup = {}
    for canonical, aliases in alias_dict.items():
        lookup[normalize_label(canonical)] = canonical
        for alias in aliases:
            lookup[normalize_label(alias)] = canonical
    return lookup


_WEEKDAY_LOOKUP = _build_lookup(WEEKDAY_ALIASES)
_PAY_BASIS_LOOKUP = _build_lookup(PAY_BASIS_ALIASES)


def normalize_weekday(value):
    """Return the canonical English weekday name for value, or None if it is not a weekday."""
    return _WEEKDAY_LOOKUP.get(normalize_label(value))


def normalize_pay_basis(value, default='Monthly'):
    """'شهري' / 'monthly' -> 'Monthly', 'يومي' / 'daily' -> 'Daily'; anything else -> default."""
    return _PAY_BASIS_LOOKUP.get(normalize_label(value), default)


def normalize_rest_days(values):
    """Map a list of weekday labels to a frozenset of canonical names, dropping unknown labels."""
    result = set()
    for value in values or ():
        name = normalize_weekday(value)
        if name is None:
            logger.warning('Ignoring unknown rest day label %r', value)
            continue
        result.add(name)
    return frozenset(result)


def to_decimal(value, default=Decimal('0')):
    if value is None or value == '':
        return default
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        return default
    return result if result.is_finite() else default
