"""Services API views.

Public catalog listing of active services and the admin CMS: create, patch,
delete and toggle a service between active and inactive.
"""

from django.db.models import ProtectedError
from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from clients.api.permissions import IsAdminOrReadOnly, IsAdminStaff, is_admin
from services.models import Service
from .serializers import ServiceSerializer


def _apply_filters(qs, params, admin: bool):
    """Filter by category and status; non-admins only ever see active services."""
    category = params.get("category")
    if category:
        allowed = {c[0] for c in Service.Category.choices}
        if category not in allowed:
            raise ValidationError({"category": f"Allowed values: {', '.join(sorted(allowed))}."})
        qs = qs.filter(category=category)

    status_value = params.get("status")
    if not admin:
        return qs.filter(status=Service.Status.ACTIVE)
    if status_value:
        if status_value not in {c[0] for c in Service.Status.choices}:
            raise ValidationError({"status": "Allowed values: active, inactive."})
        qs = qs.filter(status=status_value)
    return qs


class ServiceListCreateAPIView(generics.ListCreateAPIView):
    """GET: public catalog (active only unless admin). POST: admin creates a service."""

    queryset = Service.objects.all()
    serializer_class = ServiceSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAdminStaff()]
        return [AllowAny()]

    def get_queryset(self):
        return _apply_filters(
            super().get_queryset(), self.request.query_params, is_admin(self.request.user)
        )


class ServiceRetrieveUpdateDestroyAPIView(generics.RetrieveUpdateDestroyAPIView):
    """GET: read a service. PATCH/DELETE: admin CMS operations."""

    serializer_class = ServiceSerializer
    permission_classes = [IsAdminOrReadOnly]

    def get_queryset(self):
        qs = Service.objects.all()
        if not is_admin(self.request.user):
            qs = qs.filter(status=Service.Status.ACTIVE)
        return qs

    def update(self, request, *args, **kwargs):
        """Always apply PATCH semantics."""
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        """Delete the service unless projects still reference it."""
        instance = self.get_object()
        try:
            self.perform_destroy(instance)
        except ProtectedError:
            return Response(
                {"detail": "Service has projects and cannot be deleted. Deactivate it instead."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(status=status.HTTP_204_NO_CONTENT)


class ServiceToggleAPIView(APIView):
    """POST /api/services/{id}/toggle/ -> flip active/inactive (admin only)."""

    permission_classes = [IsAdminStaff]

    def post(self, request, pk: int):
        try:
            service = Service.objects.get(pk=pk)
        except Service.DoesNotExist:
            return Response({"detail": "Service not found."}, status=status.HTTP_404_NOT_FOUND)
        service.status = (
            Service.Status.INACTIVE
            if service.status == Service.Status.ACTIVE
            else Service.Status.ACTIVE
        )
        service.save(update_fields=["status", "updated_at"])
        return Response(ServiceSerializer(service).data, status=status.HTTP_200_OK)
