import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from inventory_dashboard.catalog.lookups import load_catalog
from inventory_dashboard.core.api_client import get_api_client
from inventory_dashboard.core.choices import PRIORITY_CHOICES, RESTOCK_STATUS_CHOICES
from inventory_dashboard.core.exceptions import ApiError
from inventory_dashboard.core.forms import apply_api_errors
from inventory_dashboard.core.offices import filtered_params, get_selected_office
from inventory_dashboard.core.serializers import parse_records
from .forms import RestockRequestForm, RestockFilterForm, make_category_for, DEFAULT_ITEM_CATEGORY
from .serializers import RestockRequestSerializer, StatusCountSerializer, PriorityCountSerializer

logger = logging.getLogger('inventory_dashboard.restock')


def _count_rows(choices, counts, field):
    """One row per choice, in choice order; values the API omitted count as zero"""
    by_value = {row[field]: row['count'] for row in counts}
    return [
        {'value': value, 'label': label, 'count': by_value.get(value, 0)}
        for value, label in choices
    ]


def request_list(request):
    """Restock requests with status/priority/category filters and summary counts"""
    client = get_api_client()
    filter_form = RestockFilterForm(request.GET)
    filters = filter_form.active_filters()

    requests_list = []
    error = None
    try:
        requests_list = parse_records(
            RestockRequestSerializer,
            client.list_restock_requests(filtered_params(request, **filters)),
        )
    except ApiError as e:
        logger.warning(f"Failed to load restock requests: {e}")
        error = str(e)

    office = get_selected_office(request)
    status_counts = []
    priority_counts = []
    counts_error = None
    try:
        status_counts = _count_rows(
            RESTOCK_STATUS_CHOICES,
            parse_records(StatusCountSerializer, client.restock_status_counts(office)),
            'status',
        )
        priority_counts = _count_rows(
            PRIORITY_CHOICES,
            parse_records(PriorityCountSerializer, client.pending_restock_by_priority(office)),
            'priority',
        )
    except ApiError as e:
        logger.warning(f"Failed to load restock summary counts: {e}")
        counts_error = str(e)

    context = {
        'requests': requests_list,
        'error': error,
        'filter_form': filter_form,
        'has_filters': bool(filters),
        'status_counts': status_counts,
        'priority_counts': priority_counts,
        'counts_error': counts_error,
    }
    return render(request, 'restock/request_list.html', context)


def _render_form(request, form, catalog, request_id=None, error=None):
    context = {
        'form': form,
        'request_id': request_id,
        'is_edit': request_id is not None,
        'error': error,
        'catalog_error': catalog[2],
        'make_model_category': form.make_model_category,
    }
    return render(request, 'restock/request_form.html', context)


def _build_form(request, client, initial=None):
    if request.method == 'POST':
        item_category = request.POST.get('item_category')
    else:
        item_category = (initial or {}).get('item_category', DEFAULT_ITEM_CATEGORY)
    catalog = load_catalog(make_category_for(item_category), client)
    makes, models, _ = catalog
    data = request.POST if request.method == 'POST' else None
    return RestockRequestForm(data, initial=initial, makes=makes, models=models), catalog


def request_create(request):
    client = get_api_client()
    form, catalog = _build_form(request, client)

    if request.method == 'POST' and form.is_valid():
        try:
            client.create_restock_request(form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to create restock request: {e}")
            apply_api_errors(form, e)
            return _render_form(request, form, catalog, error=str(e))
        logger.info(f"Created restock request for {form.cleaned_data['office']}")
        messages.success(request, 'Restock request created successfully.')
        return redirect('restock:request-list')

    return _render_form(request, form, catalog)


def request_edit(request, request_id):
    client = get_api_client()
    try:
        record = parse_records(RestockRequestSerializer, client.get_restock_request(request_id), many=False)
    except ApiError as e:
        logger.warning(f"Failed to load restock request {request_id}: {e}")
        messages.error(request, str(e))
        return redirect('restock:request-list')
    if record is None:
        raise Http404("Restock request not found")

    form, catalog = _build_form(request, client, initial=RestockRequestForm.initial_from_record(record))

    if request.method == 'POST' and form.is_valid():
        try:
            client.update_restock_request(request_id, form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to update restock request {request_id}: {e}")
            apply_api_errors(form, e)
            return _render_form(request, form, catalog, request_id=request_id, error=str(e))
        logger.info(f"Updated restock request {request_id}")
        messages.success(request, 'Restock request updated successfully.')
        return redirect('restock:request-list')

    return _render_form(request, form, catalog, request_id=request_id)


@require_POST
def request_delete(request, request_id):
    try:
        get_api_client().delete_restock_request(request_id)
    except ApiError as e:
        logger.warning(f"Failed to delete restock request {request_id}: {e}")
        messages.error(request, str(e))
    else:
        logger.info(f"Deleted restock request {request_id}")
        messages.success(request, 'Restock request deleted successfully.')
    return redirect('restock:request-list')
