import logging
from collections import namedtuple

from django.contrib import messages
from django.shortcuts import render

from inventory_dashboard.core.api_client import get_api_client
from inventory_dashboard.core.cache_utils import get_cached_report, cache_report
from inventory_dashboard.core.exceptions import ApiError
from inventory_dashboard.core.offices import get_selected_office
from inventory_dashboard.core.serializers import parse_records
from inventory_dashboard.core.utils import positive_int
from .serializers import AuditLogSerializer, ActionCountSerializer, TableActivitySerializer

logger = logging.getLogger('inventory_dashboard.reports')

Report = namedtuple('Report', ['key', 'label', 'loader', 'office_filtered'])

REPORTS = {
    'inventory': Report('inventory', 'Inventory Summary', 'inventory_summary_report', True),
    'restock': Report('restock', 'Restock Requests', 'restock_requests_report', True),
    'activity': Report('activity', 'Activity Report', 'activity_report', True),
    'office-comparison': Report('office-comparison', 'Office Comparison', 'office_comparison_report', False),
}
DEFAULT_REPORT = 'inventory'


def load_report(report, office=None, refresh=False):
    """
    Report payload from cache or the API.

    Office comparison always covers every office, so it ignores the
    selection and shares one cache entry.
    """
    office = office if report.office_filtered else None
    cached_data, cache_key = get_cached_report(report.key, office)
    if cached_data is not None and not refresh:
        logger.debug(f"Cache HIT for report {report.key} (office={office})")
        return cached_data

    client = get_api_client()
    loader = getattr(client, report.loader)
    data = loader(office) if report.office_filtered else loader()
    data = data or {}
    cache_report(cache_key, data)
    return data


def reports(request):
    """Tabbed reports; ?refresh=1 bypasses the report cache"""
    report_key = request.GET.get('report') or DEFAULT_REPORT
    if report_key not in REPORTS:
        messages.warning(request, f'Unknown report "{report_key}"; showing {REPORTS[DEFAULT_REPORT].label}.')
        report_key = DEFAULT_REPORT
    report = REPORTS[report_key]

    data = None
    error = None
    try:
        data = load_report(report, get_selected_office(request), refresh=bool(request.GET.get('refresh')))
    except ApiError as e:
        logger.warning(f"Failed to load {report.key} report: {e}")
        error = str(e)

    context = {
        'reports': REPORTS.values(),
        'report': report,
        'data': data,
        'error': error,
    }
    return render(request, 'reports/reports.html', context)


def activity_log(request):
    """
    Audit log with action counts and per-table activity.

    ``days`` and ``limit`` must be positive integers; anything else is
    ignored.
    """
    office = get_selected_office(request)
    table_name = request.GET.get('table_name', '').strip()
    record_id = request.GET.get('record_id', '').strip()
    days = positive_int(request.GET.get('days'))
    limit = positive_int(request.GET.get('limit'))
    client = get_api_client()

    entries = []
    error = None
    try:
        entries = parse_records(AuditLogSerializer, client.list_audit_logs({
            'office': office,
            'table_name': table_name,
            'record_id': record_id,
            'days': days,
            'limit': limit,
        }))
    except ApiError as e:
        logger.warning(f"Failed to load audit log: {e}")
        error = str(e)

    action_counts = []
    table_activity = []
    summary_error = None
    try:
        action_counts = parse_records(ActionCountSerializer, client.audit_action_counts(office, days))
        table_activity = parse_records(TableActivitySerializer, client.audit_table_activity(office, days))
    except ApiError as e:
        logger.warning(f"Failed to load audit summary: {e}")
        summary_error = str(e)

    context = {
        'entries': entries,
        'error': error,
        'action_counts': action_counts,
        'table_activity': table_activity,
        'summary_error': summary_error,
        'table_name': table_name,
        'record_id': record_id,
        'days': days,
        'limit': limit,
    }
    return render(request, 'reports/activity_log.html', context)


def changed_fields(old_values, new_values):
    """
    Field-by-field differences of one audit entry.

    Inserts only have new values and deletes only old ones; updates list the
    fields whose value changed.
    """
    old_values = old_values if isinstance(old_values, dict) else {}
    new_values = new_values if isinstance(new_values, dict) else {}
    changes = []
    for field in sorted(set(old_values) | set(new_values)):
        old = old_values.get(field)
        new = new_values.get(field)
        if old != new:
            changes.append({'field': field, 'old': old, 'new': new})
    return changes


def record_history(request, table_name, record_id):
    """Every audit entry for one record, with the values each change touched"""
    entries = []
    error = None
    try:
        entries = parse_records(AuditLogSerializer, get_api_client().audit_log_for_record(table_name, record_id))
    except ApiError as e:
        logger.warning(f"Failed to load history for {table_name}/{record_id}: {e}")
        error = str(e)

    history = [
        dict(entry, changes=changed_fields(entry.get('old_values'), entry.get('new_values')))
        for entry in entries
    ]
    context = {
        'table_name': table_name,
        'record_id': record_id,
        'history': history,
        'error': error,
    }
    return render(request, 'reports/record_history.html', context)
