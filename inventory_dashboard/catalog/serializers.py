from rest_framework import serializers

from inventory_dashboard.core.choices import MAKE_MODEL_CATEGORY_CHOICES


class MakeSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    category = serializers.ChoiceField(choices=MAKE_MODEL_CATEGORY_CHOICES)
    created_at = serializers.DateTimeField(required=False, allow_null=True)
    updated_at = serializers.DateTimeField(required=False, allow_null=True)


class ModelSerializer(serializers.Serializer):
    # Catalog "model" records (equipment models), not Django models
    id = serializers.CharField()
    name = serializers.CharField()
    make_id = serializers.CharField()
    make_name = serializers.CharField(required=False, allow_blank=True, default='')
    category = serializers.ChoiceField(choices=MAKE_MODEL_CATEGORY_CHOICES)
    created_at = serializers.DateTimeField(required=False, allow_null=True)
    updated_at = serializers.DateTimeField(required=False, allow_null=True)


class LookupOptionSerializer(serializers.Serializer):
    """Option payload for the make/model dropdown cascade"""
    id = serializers.CharField()
    name = serializers.CharField()
    make_id = serializers.CharField(required=False)
    make_name = serializers.CharField(required=False)
