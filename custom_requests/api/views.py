"""Custom requests API views.

Anyone may submit a request. Admins list, filter and search all requests and
move them through review; clients see their own. Conversion into a project is
not available here: it only happens through a successful checkout.
"""

from django.db.models import Count, Q
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from clients.api.permissions import IsAdminStaff, IsOwnerOrAdmin, is_admin
from custom_requests.models import CustomRequest
from lifecycle.actions import transition_request
from lifecycle.identity import Actor
from .serializers import (
    CustomRequestCreateSerializer,
    CustomRequestOutputSerializer,
    CustomRequestReviewSerializer,
)


# ----------------------------- helpers (module-level) -----------------------------

def _apply_filters(qs, params):
    """Filter by status and search name/email/category; raises ValidationError on bad input."""
    value = params.get("status")
    if value and value != "all":
        allowed = {c[0] for c in CustomRequest.Status.choices}
        if value not in allowed:
            raise ValidationError({"status": f"Allowed values: all, {', '.join(sorted(allowed))}."})
        qs = qs.filter(status=value)

    search = params.get("search")
    if search:
        qs = qs.filter(
            Q(name__icontains=search) | Q(email__icontains=search) | Q(category__icontains=search)
        )
    return qs


def _validate_review_fields(data: dict):
    """Allow only status/approved_price; return Response(400) if extra fields present."""
    allowed = {"status", "approved_price"}
    extra = set(data.keys()) - allowed
    if extra:
        return Response(
            {
                "detail": (
                    "Only 'status' and 'approved_price' may be updated. "
                    f"Invalid: {', '.join(sorted(extra))}."
                )
            },
            status=status.HTTP_400_BAD_REQUEST,
        )
    return None


# --------------------------------------- views ---------------------------------------

class CustomRequestListCreateAPIView(generics.ListCreateAPIView):
    """GET: requests (admin: all with filters, client: own). POST: public submission."""

    queryset = CustomRequest.objects.all()

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_serializer_class(self):
        return CustomRequestOutputSerializer if self.request.method == "GET" else CustomRequestCreateSerializer

    # --- GET ---
    def get_queryset(self):
        qs = super().get_queryset().order_by("-created_at", "-id")
        user = self.request.user
        if not is_admin(user):
            qs = qs.filter(user=user)
        return _apply_filters(qs, self.request.query_params)

    # --- POST ---
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        request_obj = serializer.save()
        return Response(CustomRequestOutputSerializer(request_obj).data, status=status.HTTP_201_CREATED)


class CustomRequestDetailUpdateAPIView(generics.RetrieveUpdateAPIView):
    """GET: owner or admin. PATCH: admin review (status, approved_price)."""

    queryset = CustomRequest.objects.all()
    http_method_names = ["get", "patch", "head", "options"]

    def get_permissions(self):
        if self.request.method == "PATCH":
            return [IsAuthenticated(), IsAdminStaff()]
        return [IsAuthenticated(), IsOwnerOrAdmin()]

    def get_serializer_class(self):
        if self.request.method == "PATCH":
            return CustomRequestReviewSerializer
        return CustomRequestOutputSerializer

    def partial_update(self, request, *args, **kwargs):
        """Apply an admin status change; the lifecycle rules decide legality."""
        bad = _validate_review_fields(request.data)
        if bad is not None:
            return bad
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        transition_request(
            Actor.from_user(request.user),
            instance,
            serializer.validated_data["status"],
            approved_price=serializer.validated_data.get("approved_price"),
        )
        return Response(CustomRequestOutputSerializer(instance).data, status=status.HTTP_200_OK)


class CustomRequestStatusCountsAPIView(APIView):
    """GET /api/custom-requests/status-counts/ -> per-status counters (admin only)."""

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request):
        rows = CustomRequest.objects.values("status").annotate(n=Count("id"))
        counts = {value: 0 for value, _ in CustomRequest.Status.choices}
        for row in rows:
            counts[row["status"]] = row["n"]
        counts["all"] = sum(counts.values())
        return Response(counts, status=status.HTTP_200_OK)
