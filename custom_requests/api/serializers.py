"""Custom requests API serializers.

Input serializer for the public request wizard, the output representation, and
the admin review payload (status plus optional approved price). Status and
price never come from a submission: a request always starts pending.
"""

from rest_framework import serializers

from custom_requests.models import CustomRequest
from lifecycle.actions import submit_request
from lifecycle.identity import Actor

MAX_ATTACHMENT_BYTES = 5 * 1024 * 1024


class CustomRequestCreateSerializer(serializers.ModelSerializer):
    """Input serializer for submitting a custom request."""

    attachment_size = serializers.IntegerField(required=False, min_value=0, write_only=True)

    class Meta:
        model = CustomRequest
        fields = [
            "category",
            "name",
            "email",
            "details",
            "budget",
            "timeline",
            "attachment_name",
            "attachment_size",
        ]

    def validate_attachment_size(self, value):
        if value > MAX_ATTACHMENT_BYTES:
            raise serializers.ValidationError("File size exceeds 5MB limit.")
        return value

    def create(self, validated_data):
        """Create the request in 'pending', linked to the user when signed in."""
        validated_data.pop("attachment_size", None)
        request = self.context.get("request")
        actor = Actor.from_user(getattr(request, "user", None))
        return submit_request(actor, **validated_data)


class CustomRequestOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a complete request representation."""

    category_label = serializers.CharField(source="get_category_display", read_only=True)

    class Meta:
        model = CustomRequest
        fields = [
            "id",
            "user",
            "category",
            "category_label",
            "name",
            "email",
            "details",
            "budget",
            "timeline",
            "attachment_name",
            "status",
            "approved_price",
            "converted_project",
            "created_at",
            "updated_at",
        ]


class CustomRequestReviewSerializer(serializers.Serializer):
    """Admin review payload; the price is checked by the lifecycle rules."""

    status = serializers.ChoiceField(choices=CustomRequest.Status.choices)
    approved_price = serializers.CharField(required=False, allow_null=True, allow_blank=True)
