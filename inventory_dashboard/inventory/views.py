import logging
from dataclasses import dataclass

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.views.decorators.http import require_POST

from inventory_dashboard.catalog.lookups import load_catalog
from inventory_dashboard.core.api_client import get_api_client
from inventory_dashboard.core.choices import PRINTER_ITEM_TYPES
from inventory_dashboard.core.exceptions import ApiError
from inventory_dashboard.core.forms import apply_api_errors
from inventory_dashboard.core.offices import filtered_params
from inventory_dashboard.core.serializers import parse_records
from .forms import ComputerForm, PeripheralForm, PrinterItemForm
from .serializers import ComputerSerializer, PeripheralSerializer, PrinterItemSerializer

logger = logging.getLogger('inventory_dashboard.inventory')


@dataclass(frozen=True)
class ItemKind:
    """How one inventory category maps onto forms, serializers and API calls"""
    key: str
    label: str
    plural: str
    api_name: str
    form_class: type
    serializer_class: type
    catalog_category: str
    search_placeholder: str
    has_serial_numbers: bool = True

    @property
    def url_prefix(self):
        return self.key.replace('_', '-')

    def url_name(self, action):
        return f'inventory:{self.url_prefix}-{action}'

    @property
    def list_url_name(self):
        return self.url_name('list')

    @property
    def create_url_name(self):
        return self.url_name('create')

    @property
    def edit_url_name(self):
        return self.url_name('edit')

    @property
    def delete_url_name(self):
        return self.url_name('delete')

    @property
    def delete_confirmation(self):
        return f"Are you sure you want to delete this {self.label.lower()}?"

    def api(self, client, action):
        # e.g. list_computers, get_printer_item
        name = self.key if action == 'list' else self.api_name
        return getattr(client, f"{action}_{name}")


ITEM_KINDS = {
    'computers': ItemKind(
        key='computers',
        label='Computer',
        plural='Computers',
        api_name='computer',
        form_class=ComputerForm,
        serializer_class=ComputerSerializer,
        catalog_category='computer',
        search_placeholder='Search by make or model...',
    ),
    'peripherals': ItemKind(
        key='peripherals',
        label='Peripheral',
        plural='Peripherals',
        api_name='peripheral',
        form_class=PeripheralForm,
        serializer_class=PeripheralSerializer,
        catalog_category='peripheral',
        search_placeholder='Search by name, make, or model...',
    ),
    'printer_items': ItemKind(
        key='printer_items',
        label='Printer Item',
        plural='Printer Items',
        api_name='printer_item',
        form_class=PrinterItemForm,
        serializer_class=PrinterItemSerializer,
        catalog_category='printer',
        search_placeholder='Search by type, make, or model...',
        has_serial_numbers=False,
    ),
}


def get_kind(kind):
    try:
        return ITEM_KINDS[kind]
    except KeyError:
        raise Http404(f"Unknown inventory category: {kind}")


def item_list(request, kind):
    """List one inventory category, narrowed by office and search text"""
    item_kind = get_kind(kind)
    client = get_api_client()
    search = request.GET.get('search', '').strip()
    item_type = request.GET.get('item_type', '').strip() if item_kind.key == 'printer_items' else ''

    items = []
    error = None
    try:
        if item_type:
            params = filtered_params(request)
            data = client.printer_items_by_type(item_type, params.get('office'))
        else:
            data = item_kind.api(client, 'list')(filtered_params(request, search=search))
        items = parse_records(item_kind.serializer_class, data)
    except ApiError as e:
        logger.warning(f"Failed to load {item_kind.key}: {e}")
        error = str(e)

    context = {
        'kind': item_kind,
        'items': items,
        'error': error,
        'search': search,
        'item_type': item_type,
        'printer_item_types': PRINTER_ITEM_TYPES,
    }
    return render(request, f'inventory/{item_kind.key}_list.html', context)


def _build_form(item_kind, request, catalog, initial=None):
    makes, models, _ = catalog
    data = request.POST if request.method == 'POST' else None
    return item_kind.form_class(data, initial=initial, makes=makes, models=models)


def _render_form(request, item_kind, form, catalog, item_id=None, error=None):
    context = {
        'kind': item_kind,
        'form': form,
        'item_id': item_id,
        'is_edit': item_id is not None,
        'error': error,
        'catalog_error': catalog[2],
    }
    return render(request, 'inventory/item_form.html', context)


def item_create(request, kind):
    item_kind = get_kind(kind)
    catalog = load_catalog(item_kind.catalog_category)
    form = _build_form(item_kind, request, catalog)

    if request.method == 'POST' and form.is_valid():
        try:
            item_kind.api(get_api_client(), 'create')(form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to create {item_kind.api_name}: {e}")
            apply_api_errors(form, e)
            return _render_form(request, item_kind, form, catalog, error=str(e))
        logger.info(f"Created {item_kind.api_name} in {form.cleaned_data['office']}")
        messages.success(request, f'{item_kind.label} added successfully.')
        return redirect(item_kind.list_url_name)

    return _render_form(request, item_kind, form, catalog)


def item_edit(request, kind, item_id):
    item_kind = get_kind(kind)
    client = get_api_client()
    try:
        record = parse_records(item_kind.serializer_class, item_kind.api(client, 'get')(item_id), many=False)
    except ApiError as e:
        logger.warning(f"Failed to load {item_kind.api_name} {item_id}: {e}")
        messages.error(request, str(e))
        return redirect(item_kind.list_url_name)
    if record is None:
        raise Http404(f"{item_kind.label} not found")

    catalog = load_catalog(item_kind.catalog_category, client)
    form = _build_form(item_kind, request, catalog, initial=item_kind.form_class.initial_from_record(record))

    if request.method == 'POST' and form.is_valid():
        try:
            item_kind.api(client, 'update')(item_id, form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to update {item_kind.api_name} {item_id}: {e}")
            apply_api_errors(form, e)
            return _render_form(request, item_kind, form, catalog, item_id=item_id, error=str(e))
        logger.info(f"Updated {item_kind.api_name} {item_id}")
        messages.success(request, f'{item_kind.label} updated successfully.')
        return redirect(item_kind.list_url_name)

    return _render_form(request, item_kind, form, catalog, item_id=item_id)


@require_POST
def item_delete(request, kind, item_id):
    item_kind = get_kind(kind)
    try:
        item_kind.api(get_api_client(), 'delete')(item_id)
    except ApiError as e:
        logger.warning(f"Failed to delete {item_kind.api_name} {item_id}: {e}")
        messages.error(request, str(e))
    else:
        logger.info(f"Deleted {item_kind.api_name} {item_id}")
        messages.success(request, f'{item_kind.label} deleted successfully.')
    return redirect(item_kind.list_url_name)
