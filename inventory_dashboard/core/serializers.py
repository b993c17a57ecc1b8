import logging

from rest_framework import serializers

from .choices import OFFICE_CHOICES
from .exceptions import ApiError

logger = logging.getLogger(__name__)

UNEXPECTED_RESPONSE = 'Unexpected response from inventory API'


def parse_records(serializer_class, data, many=True):
    """
    Validate API records against their serializer.

    Timestamps come back as datetimes; fields the dashboard does not use are
    dropped. A record that does not fit raises ApiError so the page shows an
    error instead of a half-rendered table.
    """
    if data is None:
        return [] if many else None
    serializer = serializer_class(data=data, many=many)
    if not serializer.is_valid():
        logger.warning(f"{serializer_class.__name__} rejected API data: {serializer.errors}")
        raise ApiError(UNEXPECTED_RESPONSE)
    return serializer.validated_data


class InventoryCountSerializer(serializers.Serializer):
    office = serializers.ChoiceField(choices=OFFICE_CHOICES)
    total = serializers.IntegerField(default=0, allow_null=True)
    total_quantity = serializers.IntegerField(default=0, allow_null=True)


class HealthSerializer(serializers.Serializer):
    message = serializers.CharField(required=False, allow_blank=True)
    database = serializers.CharField(required=False, allow_blank=True)
    timestamp = serializers.DateTimeField(required=False)
