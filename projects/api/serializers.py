"""Projects API serializers.

Output representation of a project (with delivery progress and the single
next stage it may move to) and the status-only patch payload.
"""

from rest_framework import serializers

from lifecycle.rules import next_project_status, project_progress
from projects.models import Project


class ProjectOutputSerializer(serializers.ModelSerializer):
    """Read serializer for returning a complete project representation."""

    stage_label = serializers.CharField(source="get_status_display", read_only=True)
    progress = serializers.SerializerMethodField()
    next_status = serializers.SerializerMethodField()

    class Meta:
        model = Project
        fields = [
            "id",
            "client",
            "service",
            "source_request",
            "title",
            "description",
            "amount",
            "status",
            "stage_label",
            "progress",
            "next_status",
            "created_at",
            "updated_at",
        ]

    def get_progress(self, obj):
        return project_progress(obj.status)

    def get_next_status(self, obj):
        return next_project_status(obj.status)


class ProjectStatusPatchSerializer(serializers.Serializer):
    """Patch serializer used to move a project to its next status."""

    status = serializers.ChoiceField(choices=Project.Status.choices)
