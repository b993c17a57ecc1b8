"""Catalog data for the item and restock forms"""
import logging

from inventory_dashboard.core.api_client import get_api_client
from inventory_dashboard.core.cache_utils import get_cached_makes, get_cached_models
from inventory_dashboard.core.exceptions import ApiError
from inventory_dashboard.core.serializers import parse_records

from .serializers import MakeSerializer, ModelSerializer

logger = logging.getLogger('inventory_dashboard.catalog')


def load_makes(category, client=None):
    client = client or get_api_client()
    return parse_records(MakeSerializer, get_cached_makes(client, category))


def load_models(category, make_id=None, client=None):
    client = client or get_api_client()
    return parse_records(ModelSerializer, get_cached_models(client, category, make_id))


def load_catalog(category, client=None):
    """
    Makes and models of one category for a form.

    Returns (makes, models, error). A failed lookup leaves both lists empty
    so the form still renders and shows the error next to the dropdowns.
    """
    client = client or get_api_client()
    try:
        return load_makes(category, client), load_models(category, client=client), None
    except ApiError as e:
        logger.warning(f"Could not load {category} catalog: {e}")
        return [], [], str(e)
