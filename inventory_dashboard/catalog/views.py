import logging

from django.contrib import messages
from django.http import Http404
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from inventory_dashboard.core.api_client import get_api_client
from inventory_dashboard.core.cache_utils import invalidate_catalog_cache
from inventory_dashboard.core.choices import MAKE_MODEL_CATEGORIES
from inventory_dashboard.core.exceptions import ApiError
from inventory_dashboard.core.serializers import parse_records
from .forms import MakeForm, EquipmentModelForm
from .lookups import load_makes, load_models
from .serializers import MakeSerializer, ModelSerializer, LookupOptionSerializer

logger = logging.getLogger('inventory_dashboard.catalog')

# Admin tab -> make/model category
ADMIN_TABS = {
    'computers': 'computer',
    'peripherals': 'peripheral',
    'printers': 'printer',
}
DEFAULT_TAB = 'computers'
CATEGORY_TABS = {category: tab for tab, category in ADMIN_TABS.items()}


def _tab_for(value):
    return value if value in ADMIN_TABS else DEFAULT_TAB


def _admin_url(category):
    return f"{reverse('catalog:admin')}?tab={CATEGORY_TABS.get(category, DEFAULT_TAB)}"


def catalog_admin(request):
    """Makes and models of one category, with add forms for both"""
    tab = _tab_for(request.GET.get('tab'))
    category = ADMIN_TABS[tab]
    client = get_api_client()

    makes = []
    makes_error = None
    try:
        makes = load_makes(category, client)
    except ApiError as e:
        logger.warning(f"Failed to load {category} makes: {e}")
        makes_error = str(e)

    models = []
    models_error = None
    try:
        models = load_models(category, client=client)
    except ApiError as e:
        logger.warning(f"Failed to load {category} models: {e}")
        models_error = str(e)

    context = {
        'tabs': [(name, name.capitalize()) for name in ADMIN_TABS],
        'tab': tab,
        'category': category,
        'makes': makes,
        'models': models,
        'makes_error': makes_error,
        'models_error': models_error,
        'make_form': MakeForm(initial={'category': category}),
        'model_form': EquipmentModelForm(initial={'category': category}, makes=makes),
    }
    return render(request, 'catalog/admin.html', context)


def _render_make_form(request, form, category, make_id=None, error=None):
    context = {
        'form': form,
        'category': category,
        'make_id': make_id,
        'is_edit': make_id is not None,
        'error': error,
        'cancel_url': _admin_url(category),
    }
    return render(request, 'catalog/make_form.html', context)


def make_create(request):
    category = request.POST.get('category') or ADMIN_TABS[_tab_for(request.GET.get('tab'))]
    form = MakeForm(request.POST or None, initial={'category': category})

    if request.method == 'POST' and form.is_valid():
        try:
            get_api_client().create_make(form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to create make: {e}")
            return _render_make_form(request, form, category, error=str(e))
        invalidate_catalog_cache()
        logger.info(f"Created {category} make {form.cleaned_data['name']}")
        messages.success(request, f"Make \"{form.cleaned_data['name']}\" added.")
        return redirect(_admin_url(form.cleaned_data['category']))

    return _render_make_form(request, form, category)


def make_edit(request, make_id):
    client = get_api_client()
    try:
        make = parse_records(MakeSerializer, client.get_make(make_id), many=False)
    except ApiError as e:
        logger.warning(f"Failed to load make {make_id}: {e}")
        messages.error(request, str(e))
        return redirect('catalog:admin')
    if make is None:
        raise Http404("Make not found")

    form = MakeForm(request.POST or None, initial={'name': make['name'], 'category': make['category']})

    if request.method == 'POST' and form.is_valid():
        try:
            client.update_make(make_id, form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to update make {make_id}: {e}")
            return _render_make_form(request, form, make['category'], make_id=make_id, error=str(e))
        invalidate_catalog_cache()
        logger.info(f"Updated make {make_id}")
        messages.success(request, f"Make \"{form.cleaned_data['name']}\" updated.")
        return redirect(_admin_url(form.cleaned_data['category']))

    return _render_make_form(request, form, make['category'], make_id=make_id)


@require_POST
def make_delete(request, make_id):
    category = request.POST.get('category')
    try:
        get_api_client().delete_make(make_id)
    except ApiError as e:
        logger.warning(f"Failed to delete make {make_id}: {e}")
        messages.error(request, str(e))
    else:
        invalidate_catalog_cache()
        logger.info(f"Deleted make {make_id}")
        messages.success(request, 'Make deleted.')
    return redirect(_admin_url(category))


def _render_model_form(request, form, category, model_id=None, error=None, makes_error=None):
    context = {
        'form': form,
        'category': category,
        'model_id': model_id,
        'is_edit': model_id is not None,
        'error': error,
        'makes_error': makes_error,
        'cancel_url': _admin_url(category),
    }
    return render(request, 'catalog/model_form.html', context)


def _category_makes(client, category):
    try:
        return load_makes(category, client), None
    except ApiError as e:
        logger.warning(f"Failed to load {category} makes: {e}")
        return [], str(e)


def model_create(request):
    client = get_api_client()
    category = request.POST.get('category') or ADMIN_TABS[_tab_for(request.GET.get('tab'))]
    if category not in MAKE_MODEL_CATEGORIES:
        raise Http404("Unknown category")
    makes, makes_error = _category_makes(client, category)
    if not makes and not makes_error:
        messages.warning(request, 'You need to add at least one make before you can add models.')
        return redirect(_admin_url(category))

    form = EquipmentModelForm(request.POST or None, initial={'category': category}, makes=makes)

    if request.method == 'POST' and form.is_valid():
        try:
            client.create_model(form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to create model: {e}")
            return _render_model_form(request, form, category, error=str(e))
        invalidate_catalog_cache()
        logger.info(f"Created {category} model {form.cleaned_data['name']}")
        messages.success(request, f"Model \"{form.cleaned_data['name']}\" added.")
        return redirect(_admin_url(category))

    return _render_model_form(request, form, category, makes_error=makes_error)


def model_edit(request, model_id):
    client = get_api_client()
    try:
        model = parse_records(ModelSerializer, client.get_model(model_id), many=False)
    except ApiError as e:
        logger.warning(f"Failed to load model {model_id}: {e}")
        messages.error(request, str(e))
        return redirect('catalog:admin')
    if model is None:
        raise Http404("Model not found")

    category = model['category']
    makes, makes_error = _category_makes(client, category)
    form = EquipmentModelForm(
        request.POST or None,
        initial={'name': model['name'], 'make_id': model['make_id'], 'category': category},
        makes=makes,
    )

    if request.method == 'POST' and form.is_valid():
        try:
            client.update_model(model_id, form.to_payload())
        except ApiError as e:
            logger.warning(f"Failed to update model {model_id}: {e}")
            return _render_model_form(request, form, category, model_id=model_id, error=str(e))
        invalidate_catalog_cache()
        logger.info(f"Updated model {model_id}")
        messages.success(request, f"Model \"{form.cleaned_data['name']}\" updated.")
        return redirect(_admin_url(category))

    return _render_model_form(request, form, category, model_id=model_id, makes_error=makes_error)


@require_POST
def model_delete(request, model_id):
    category = request.POST.get('category')
    try:
        get_api_client().delete_model(model_id)
    except ApiError as e:
        logger.warning(f"Failed to delete model {model_id}: {e}")
        messages.error(request, str(e))
    else:
        invalidate_catalog_cache()
        logger.info(f"Deleted model {model_id}")
        messages.success(request, 'Model deleted.')
    return redirect(_admin_url(category))


def _lookup_category(request):
    category = request.query_params.get('category') or None
    if category is not None and category not in MAKE_MODEL_CATEGORIES:
        return None, Response(
            {'error': f'Invalid category: {category}'},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return category, None


@api_view(['GET'])
def make_lookup(request):
    """Makes for the dropdown cascade: {"results": [{id, name}]}"""
    category, error_response = _lookup_category(request)
    if error_response:
        return error_response

    try:
        makes = load_makes(category)
    except ApiError as e:
        logger.error(f"Make lookup failed (category={category}): {e}")
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response({'results': LookupOptionSerializer(makes, many=True).data})


@api_view(['GET'])
def model_lookup(request):
    """
    Models for the dropdown cascade.

    Narrowed by ``make_id`` or by ``make`` (a make name, as stored on items);
    an unknown make name yields no models.
    """
    category, error_response = _lookup_category(request)
    if error_response:
        return error_response

    make_id = request.query_params.get('make_id') or None
    make_name = request.query_params.get('make') or None
    client = get_api_client()
    try:
        if make_name and not make_id:
            make_id = next(
                (make['id'] for make in load_makes(category, client) if make['name'] == make_name),
                None,
            )
            if make_id is None:
                return Response({'results': []})
        models = load_models(category, make_id, client)
    except ApiError as e:
        logger.error(f"Model lookup failed (category={category}, make_id={make_id}): {e}")
        return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)

    return Response({'results': LookupOptionSerializer(models, many=True).data})
