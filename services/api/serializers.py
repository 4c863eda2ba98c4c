"""Services API serializers.

Provide serializers for reading catalog services and for creating or patching
them through the admin CMS. Features must be a list of strings and prices
cannot be negative.
"""

from rest_framework import serializers

from ..models import Service


def _ensure_features_is_str_list(features):
    if not isinstance(features, list):
        raise serializers.ValidationError({"features": "Must be an array of strings."})
    if any(not isinstance(x, str) for x in features):
        raise serializers.ValidationError({"features": "All features must be strings."})


class ServiceSerializer(serializers.ModelSerializer):
    """Read/write serializer for a catalog service."""

    category_label = serializers.CharField(source="get_category_display", read_only=True)

    class Meta:
        model = Service
        fields = [
            "id",
            "category",
            "category_label",
            "title",
            "description",
            "price",
            "features",
            "image",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_price(self, value):
        if value < 0:
            raise serializers.ValidationError("Must be >= 0.")
        return value

    def validate(self, attrs):
        """Ensure features is a list of strings when provided."""
        features = attrs.get("features", None)
        if features is not None:
            _ensure_features_is_str_list(features)
        return attrs
