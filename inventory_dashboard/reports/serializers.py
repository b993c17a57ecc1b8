from rest_framework import serializers

from inventory_dashboard.core.choices import OFFICE_CHOICES, AUDIT_ACTION_CHOICES


class AuditLogSerializer(serializers.Serializer):
    id = serializers.CharField()
    table_name = serializers.CharField()
    record_id = serializers.CharField()
    action = serializers.ChoiceField(choices=AUDIT_ACTION_CHOICES)
    old_values = serializers.JSONField(required=False, allow_null=True)
    new_values = serializers.JSONField(required=False, allow_null=True)
    office = serializers.ChoiceField(choices=OFFICE_CHOICES, required=False, allow_null=True, allow_blank=True)
    timestamp = serializers.DateTimeField()


class ActionCountSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=AUDIT_ACTION_CHOICES)
    count = serializers.IntegerField()


class TableActivitySerializer(serializers.Serializer):
    table_name = serializers.CharField()
    activity_count = serializers.IntegerField()
