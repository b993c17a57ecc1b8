import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .api_client import get_api_client
from .choices import OFFICES
from .exceptions import ApiError
from .offices import get_selected_office, set_selected_office
from .serializers import InventoryCountSerializer, HealthSerializer, parse_records
from .utils import office_totals, safe_next_url
from inventory_dashboard.reports.serializers import AuditLogSerializer
from inventory_dashboard.restock.serializers import RestockRequestSerializer

logger = logging.getLogger('inventory_dashboard.core')

DASHBOARD_PANEL_LIMIT = 5


def home(request):
    """
    Dashboard: item counts per office, recent activity and pending restock requests.

    Each panel loads independently so one failing API call does not blank
    the whole page.
    """
    selected_office = get_selected_office(request)
    client = get_api_client()

    counts_error = None
    office_rows = []
    try:
        computer_counts = parse_records(InventoryCountSerializer, client.computer_counts())
        peripheral_counts = parse_records(InventoryCountSerializer, client.peripheral_counts())
        printer_item_counts = parse_records(InventoryCountSerializer, client.printer_item_counts())
        offices = [selected_office] if selected_office else OFFICES
        office_rows = office_totals(offices, computer_counts, peripheral_counts, printer_item_counts)
    except ApiError as e:
        logger.warning(f"Dashboard counts unavailable: {e}")
        counts_error = str(e)

    activity_error = None
    recent_activity = []
    try:
        recent_activity = parse_records(
            AuditLogSerializer,
            client.recent_audit_logs({'office': selected_office, 'limit': DASHBOARD_PANEL_LIMIT}),
        )
    except ApiError as e:
        logger.warning(f"Dashboard recent activity unavailable: {e}")
        activity_error = str(e)

    requests_error = None
    pending_requests = []
    try:
        pending_requests = parse_records(
            RestockRequestSerializer,
            client.list_restock_requests({
                'status': 'pending',
                'office': selected_office,
                'limit': DASHBOARD_PANEL_LIMIT,
            }),
        )
    except ApiError as e:
        logger.warning(f"Dashboard pending requests unavailable: {e}")
        requests_error = str(e)

    context = {
        'office_rows': office_rows,
        'counts_error': counts_error,
        'recent_activity': recent_activity,
        'activity_error': activity_error,
        'pending_requests': pending_requests,
        'requests_error': requests_error,
    }
    return render(request, 'core/home.html', context)


@require_POST
def select_office(request):
    """Remember the office chosen in the header selector"""
    office = set_selected_office(request, request.POST.get('office', '').strip())
    if office is None and request.POST.get('office'):
        messages.warning(request, 'Unknown office; showing all offices')
    return redirect(safe_next_url(request, fallback='core:home'))


@api_view(['GET'])
def health(request):
    """Dashboard liveness plus the inventory API's own health report"""
    try:
        data = parse_records(HealthSerializer, get_api_client().health(), many=False)
    except ApiError as e:
        logger.error(f"Inventory API health check failed: {e}")
        return Response(
            {'dashboard': 'ok', 'api': 'unavailable', 'error': str(e)},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return Response({'dashboard': 'ok', 'api': 'ok', 'details': HealthSerializer(data).data})
