"""Projects API views.

Clients list their own projects (dashboard), admins list all of them and get
the kanban board. Status changes are admin-only and move a project exactly one
stage forward.
"""

from rest_framework import generics, status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from clients.api.permissions import IsAdminStaff, IsOwnerOrAdmin, is_admin
from lifecycle.actions import advance_project
from lifecycle.identity import Actor
from lifecycle.rules import PROJECT_FLOW
from projects.models import Project
from .serializers import ProjectOutputSerializer, ProjectStatusPatchSerializer


# ----------------------------- helpers (module-level) -----------------------------

def _visible_projects(user):
    """All projects for admins; otherwise the projects of the user's client record."""
    qs = Project.objects.select_related("client", "service")
    if is_admin(user):
        return qs
    return qs.filter(client__user=user)


def _apply_status_filter(qs, params):
    value = params.get("status")
    if value:
        if value not in PROJECT_FLOW:
            raise ValidationError({"status": f"Allowed values: {', '.join(PROJECT_FLOW)}."})
        qs = qs.filter(status=value)
    return qs


def _validate_patch_only_status(data: dict):
    """Allow only 'status' in PATCH; return a 400 response otherwise."""
    extra = set(data.keys()) - {"status"}
    if extra:
        return Response(
            {"detail": f"Only 'status' may be updated. Invalid fields: {', '.join(sorted(extra))}."},
            status=status.HTTP_400_BAD_REQUEST,
        )
    return None


# --------------------------------------- views ---------------------------------------

class ProjectListAPIView(generics.ListAPIView):
    """GET: the caller's projects (admin: all), newest first, optional ?status=."""

    serializer_class = ProjectOutputSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        qs = _visible_projects(self.request.user).order_by("-created_at", "-id")
        return _apply_status_filter(qs, self.request.query_params)


class ProjectDetailUpdateAPIView(generics.RetrieveUpdateAPIView):
    """GET: project for its owner or an admin. PATCH: admin moves it one stage forward."""

    queryset = Project.objects.select_related("client", "service")
    http_method_names = ["get", "patch", "head", "options"]

    def get_permissions(self):
        if self.request.method == "PATCH":
            return [IsAuthenticated(), IsAdminStaff()]
        return [IsAuthenticated(), IsOwnerOrAdmin()]

    def get_serializer_class(self):
        if self.request.method == "PATCH":
            return ProjectStatusPatchSerializer
        return ProjectOutputSerializer

    def partial_update(self, request, *args, **kwargs):
        """Allow updating only 'status' along the delivery pipeline."""
        bad = _validate_patch_only_status(request.data)
        if bad is not None:
            return bad
        instance = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        advance_project(Actor.from_user(request.user), instance, serializer.validated_data["status"])
        return Response(ProjectOutputSerializer(instance).data, status=status.HTTP_200_OK)


class ProjectBoardAPIView(APIView):
    """GET /api/projects/board/ -> kanban columns in pipeline order (admin only)."""

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request):
        projects = list(Project.objects.select_related("client").order_by("-created_at", "-id"))
        labels = dict(Project.Status.choices)
        columns = []
        for stage in PROJECT_FLOW:
            in_column = [p for p in projects if p.status == stage]
            columns.append(
                {
                    "status": stage,
                    "label": labels[stage],
                    "count": len(in_column),
                    "projects": ProjectOutputSerializer(in_column, many=True).data,
                }
            )
        return Response({"columns": columns}, status=status.HTTP_200_OK)
