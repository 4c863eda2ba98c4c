"""Checkout API view.

POST /api/checkout/ charges the simulated payment provider and, on success,
creates the project (catalog purchase) or converts the custom request.
"""

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from projects.api.serializers import ProjectOutputSerializer

from ..checkout import checkout
from ..identity import Actor
from .serializers import CheckoutSerializer


class CheckoutAPIView(APIView):
    """Sign-in required; returns the created project and the payment reference."""

    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        result = checkout(
            Actor.from_user(request.user),
            data["purchase"],
            method=data["payment_method"],
            card_number=data.get("card_number", ""),
        )
        payload = {
            "kind": data["kind"],
            "payment_reference": result.payment.reference,
            "project": ProjectOutputSerializer(result.project).data,
        }
        return Response(payload, status=status.HTTP_201_CREATED)
