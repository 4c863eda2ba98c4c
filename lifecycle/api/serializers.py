"""Checkout API serializers.

Validate the checkout payload and turn it into one of the purchase variants.
``kind`` selects the variant; each variant only accepts the id it needs.
"""

from rest_framework import serializers
from rest_framework.exceptions import NotFound

from custom_requests.models import CustomRequest
from services.models import Service

from ..checkout import PURCHASE_KINDS, CatalogPurchase, CustomRequestPurchase
from ..payments import PAYMENT_METHODS


class CheckoutSerializer(serializers.Serializer):
    """Input serializer for POST /api/checkout/."""

    kind = serializers.ChoiceField(choices=PURCHASE_KINDS)
    service_id = serializers.IntegerField(required=False)
    request_id = serializers.IntegerField(required=False)
    payment_method = serializers.ChoiceField(choices=PAYMENT_METHODS, default="card")
    card_number = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        """Require exactly the id matching ``kind`` and resolve the purchase."""
        kind = attrs["kind"]
        if kind == CatalogPurchase.kind:
            if attrs.get("service_id") is None:
                raise serializers.ValidationError({"service_id": "Required for catalog purchases."})
            if attrs.get("request_id") is not None:
                raise serializers.ValidationError({"request_id": "Not allowed for catalog purchases."})
            try:
                service = Service.objects.get(id=attrs["service_id"])
            except Service.DoesNotExist:
                raise NotFound("Service not found.")
            attrs["purchase"] = CatalogPurchase(service=service)
        else:
            if attrs.get("request_id") is None:
                raise serializers.ValidationError({"request_id": "Required for custom request payments."})
            if attrs.get("service_id") is not None:
                raise serializers.ValidationError({"service_id": "Not allowed for custom request payments."})
            try:
                request_obj = CustomRequest.objects.get(id=attrs["request_id"])
            except CustomRequest.DoesNotExist:
                raise NotFound("Custom request not found.")
            attrs["purchase"] = CustomRequestPurchase(request=request_obj)

        if attrs["payment_method"] == "card" and not attrs.get("card_number"):
            raise serializers.ValidationError({"card_number": "Required for card payments."})
        return attrs
