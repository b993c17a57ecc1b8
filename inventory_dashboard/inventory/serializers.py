from rest_framework import serializers

from inventory_dashboard.core.choices import OFFICE_CHOICES, ITEM_STATUS_CHOICES


class SerialNumberSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_null=True)
    item_type = serializers.CharField(required=False, allow_blank=True)
    item_id = serializers.CharField(required=False, allow_null=True)
    serial_number = serializers.CharField(allow_blank=True, allow_null=True, default='')
    status = serializers.CharField(required=False, allow_blank=True)
    created_at = serializers.DateTimeField(required=False, allow_null=True)
    updated_at = serializers.DateTimeField(required=False, allow_null=True)


class InventoryItemSerializer(serializers.Serializer):
    """Fields every inventory record shares"""
    id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=0)
    office = serializers.ChoiceField(choices=OFFICE_CHOICES)
    status = serializers.ChoiceField(choices=ITEM_STATUS_CHOICES)
    created_at = serializers.DateTimeField(required=False, allow_null=True)
    updated_at = serializers.DateTimeField(required=False, allow_null=True)


class ComputerSerializer(InventoryItemSerializer):
    make = serializers.CharField(allow_blank=True)
    model = serializers.CharField(allow_blank=True)
    serial_numbers = SerialNumberSerializer(many=True, default=list)


class PeripheralSerializer(InventoryItemSerializer):
    item_name = serializers.CharField()
    make = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    model = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    serial_numbers = SerialNumberSerializer(many=True, default=list)


class PrinterItemSerializer(InventoryItemSerializer):
    item_type = serializers.CharField()
    make = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    model = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
