"""Messaging API serializers."""

from rest_framework import serializers

from messaging.models import Message


class ThreadTargetSerializer(serializers.Serializer):
    """Names a conversation by exactly one of request_id / project_id."""

    request_id = serializers.IntegerField(required=False, min_value=1)
    project_id = serializers.IntegerField(required=False, min_value=1)

    def validate(self, attrs):
        given = [name for name in ("request_id", "project_id") if attrs.get(name) is not None]
        if len(given) != 1:
            raise serializers.ValidationError(
                "Provide exactly one of 'request_id' or 'project_id'."
            )
        return attrs


class MessageCreateSerializer(ThreadTargetSerializer):
    text = serializers.CharField(trim_whitespace=True, allow_blank=False)


class MessageOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = Message
        fields = [
            "id",
            "request",
            "project",
            "sender",
            "sender_type",
            "text",
            "read",
            "created_at",
        ]
        read_only_fields = fields
