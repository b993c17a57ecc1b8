from django import template
from django.utils.dateparse import parse_datetime

register = template.Library()

STATUS_BADGES = {
    'active': 'status-active',
    'maintenance': 'status-maintenance',
    'inactive': 'status-inactive',
    'retired': 'status-inactive',
    'pending': 'status-pending',
    'approved': 'status-approved',
    'ordered': 'status-ordered',
    'received': 'status-received',
    'cancelled': 'status-cancelled',
}

PRIORITY_BADGES = {
    'urgent': 'priority-urgent',
    'high': 'priority-high',
    'normal': 'priority-normal',
    'low': 'priority-low',
}

ACTION_BADGES = {
    'INSERT': 'action-insert',
    'UPDATE': 'action-update',
    'DELETE': 'action-delete',
}


@register.filter
def status_badge(status):
    return f"status-badge {STATUS_BADGES.get(status, 'status-inactive')}"


@register.filter
def priority_badge(priority):
    return f"status-badge {PRIORITY_BADGES.get(priority, 'priority-low')}"


@register.filter
def action_badge(action):
    return f"status-badge {ACTION_BADGES.get(action, 'action-delete')}"


@register.filter
def pluralize_serials(count):
    return f"{count} serial number{'' if count == 1 else 's'}"


@register.simple_tag(takes_context=True)
def query_with(context, **changes):
    """Current query string with some parameters replaced (None/'' removes them)"""
    request = context['request']
    params = request.GET.copy()
    for key, value in changes.items():
        if value is None or value == '':
            params.pop(key, None)
        else:
            params[key] = value
    return f"?{params.urlencode()}" if params else "?"


@register.filter
def as_datetime(value):
    """ISO-8601 strings from raw report payloads -> datetime for the date filter"""
    if isinstance(value, str):
        return parse_datetime(value) or value
    return value
