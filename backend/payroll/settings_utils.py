"""
Helpers for runtime settings stored in SystemSetting (key/value rows editable from the admin or API).
"""
from .models import SystemSetting


def get_system_setting(key, default=''):
    """Get value for key, or default when the row is missing or blank."""
    try:
        obj = SystemSetting.objects.get(key=key)
    except SystemSetting.DoesNotExist:
        return default
    if obj.value is None or str(obj.value).strip() == '':
        return default
    return obj.value


def set_system_setting(key, value, description=''):
    """Set or create the SystemSetting row for key."""
    value = str(value).strip() if value is not None else ''
    obj, _ = SystemSetting.objects.update_or_create(
        key=key,
        defaults={'value': value, 'description': description or key},
    )
    return obj
