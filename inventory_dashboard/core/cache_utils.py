"""
Caching for slow-changing API lookups.

Make/model lists feed every item form and change rarely; report payloads
are expensive aggregates on the API side. Both are cached in the default
cache (Redis via django-redis when REDIS_URL is set).

Catalog keys embed a generation number, so one increment invalidates every
cached make and model list regardless of the cache backend.
"""
from django.conf import settings
from django.core.cache import cache
import hashlib
import logging

logger = logging.getLogger(__name__)

CATALOG_GENERATION_KEY = 'catalog_generation'


def make_cache_key(prefix, *args, **kwargs):
    """Generate a unique cache key from arguments"""
    key_data = f"{prefix}:{args}:{sorted(kwargs.items())}"
    # Hash it to keep key length reasonable
    key_hash = hashlib.md5(key_data.encode()).hexdigest()
    return f"{prefix}:{key_hash}"


def get_catalog_generation():
    generation = cache.get(CATALOG_GENERATION_KEY)
    if generation is None:
        generation = 1
        cache.add(CATALOG_GENERATION_KEY, generation, None)
    return generation


def invalidate_catalog_cache():
    """Drop every cached make and model list"""
    try:
        cache.incr(CATALOG_GENERATION_KEY)
    except ValueError:
        # Key expired or was never set
        cache.set(CATALOG_GENERATION_KEY, get_catalog_generation() + 1, None)
    logger.info("Invalidated catalog cache")


def _catalog_key(kind, **filters):
    return make_cache_key(f"catalog_{kind}", get_catalog_generation(), **filters)


def get_cached_makes(client, category=None):
    """Makes for a category, from cache or the API"""
    cache_key = _catalog_key('makes', category=category)
    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.debug(f"Cache HIT for makes (category={category})")
        return cached_data

    logger.debug(f"Cache MISS for makes (category={category})")
    data = client.list_makes(category) or []
    cache.set(cache_key, data, settings.CATALOG_CACHE_TTL)
    return data


def get_cached_models(client, category=None, make_id=None):
    """Models for a category and/or make, from cache or the API"""
    cache_key = _catalog_key('models', category=category, make_id=make_id)
    cached_data = cache.get(cache_key)
    if cached_data is not None:
        logger.debug(f"Cache HIT for models (category={category}, make_id={make_id})")
        return cached_data

    logger.debug(f"Cache MISS for models (category={category}, make_id={make_id})")
    data = client.list_models(category, make_id) or []
    cache.set(cache_key, data, settings.CATALOG_CACHE_TTL)
    return data


def get_cached_report(report_type, office=None):
    """Returns tuple: (cached_data, cache_key)"""
    cache_key = make_cache_key("report", report_type, office)
    return cache.get(cache_key), cache_key


def cache_report(cache_key, data, ttl=None):
    cache.set(cache_key, data, ttl or settings.REPORTS_CACHE_TTL)
    logger.debug(f"Cached report: {cache_key}")
