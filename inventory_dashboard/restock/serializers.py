from rest_framework import serializers

from inventory_dashboard.core.choices import (
    OFFICE_CHOICES, ITEM_CATEGORY_CHOICES, PRIORITY_CHOICES, RESTOCK_STATUS_CHOICES
)


class RestockRequestSerializer(serializers.Serializer):
    id = serializers.CharField()
    item_category = serializers.ChoiceField(choices=ITEM_CATEGORY_CHOICES)
    item_description = serializers.CharField(allow_blank=True)
    make_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    model_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    make_name = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    model_name = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    quantity_requested = serializers.IntegerField(min_value=0)
    office = serializers.ChoiceField(choices=OFFICE_CHOICES)
    priority = serializers.ChoiceField(choices=PRIORITY_CHOICES)
    status = serializers.ChoiceField(choices=RESTOCK_STATUS_CHOICES)
    requested_by = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    created_at = serializers.DateTimeField(required=False, allow_null=True)
    updated_at = serializers.DateTimeField(required=False, allow_null=True)


class StatusCountSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RESTOCK_STATUS_CHOICES)
    count = serializers.IntegerField()


class PriorityCountSerializer(serializers.Serializer):
    priority = serializers.ChoiceField(choices=PRIORITY_CHOICES)
    count = serializers.IntegerField()
