"""Messaging API views.

A conversation is addressed by the record it belongs to (a custom request or
a project). The view resolves the record, checks the caller is its owner or an
admin, and then works on the shared thread key, so both sides always read and
write the same thread.
"""

from django.db.models import Count, Max, Q
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from clients.api.permissions import IsOwnerOrAdmin, is_admin
from custom_requests.models import CustomRequest
from lifecycle.identity import Actor
from messaging.models import Message
from messaging.threads import (
    mark_thread_read,
    post_message,
    resolve_thread_key,
    thread_messages,
)
from projects.models import Project
from .serializers import MessageCreateSerializer, MessageOutputSerializer, ThreadTargetSerializer


# ----------------------------- helpers (module-level) -----------------------------

def _thread_entity(validated):
    if validated.get("request_id") is not None:
        return get_object_or_404(CustomRequest, pk=validated["request_id"])
    return get_object_or_404(Project.objects.select_related("client"), pk=validated["project_id"])


def _unread_filter(actor):
    """Unread messages written by the other party."""
    other = Message.SenderType.CLIENT if actor.is_admin else Message.SenderType.ADMIN
    return Q(messages__read=False, messages__sender_type=other)


def _key_payload(key):
    return {"field": key.field, "id": key.id}


# --------------------------------------- views ---------------------------------------

class ThreadAccessMixin:
    """Resolves a validated target into a thread key for a permitted caller."""

    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]

    def resolve_thread(self, serializer_class, data):
        serializer = serializer_class(data=data)
        serializer.is_valid(raise_exception=True)
        entity = _thread_entity(serializer.validated_data)
        self.check_object_permissions(self.request, entity)
        return resolve_thread_key(entity), serializer.validated_data


class MessageListCreateAPIView(ThreadAccessMixin, APIView):
    """GET: messages of one thread, oldest first. POST: append a message."""

    def get(self, request):
        key, _ = self.resolve_thread(ThreadTargetSerializer, request.query_params)
        data = MessageOutputSerializer(thread_messages(key), many=True).data
        return Response(data, status=status.HTTP_200_OK)

    def post(self, request):
        key, validated = self.resolve_thread(MessageCreateSerializer, request.data)
        message = post_message(Actor.from_user(request.user), key, validated["text"])
        return Response(MessageOutputSerializer(message).data, status=status.HTTP_201_CREATED)


class MessageMarkReadAPIView(ThreadAccessMixin, APIView):
    """POST: mark the other party's messages in a thread as read."""

    def post(self, request):
        key, _ = self.resolve_thread(ThreadTargetSerializer, request.data)
        updated = mark_thread_read(Actor.from_user(request.user), key)
        return Response(
            {"thread": _key_payload(key), "updated": updated},
            status=status.HTTP_200_OK,
        )


class ThreadListAPIView(APIView):
    """GET /api/messages/threads/ -> the caller's conversations with unread counts.

    Requests carry their own thread (also after conversion); catalog projects
    carry theirs. Admins see every conversation.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        actor = Actor.from_user(request.user)
        requests_qs = CustomRequest.objects.all()
        projects_qs = Project.objects.filter(source_request__isnull=True)
        if not is_admin(request.user):
            requests_qs = requests_qs.filter(user=request.user)
            projects_qs = projects_qs.filter(client__user=request.user)

        requests_qs = requests_qs.annotate(
            unread=Count("messages", filter=_unread_filter(actor)),
            last_message_at=Max("messages__created_at"),
        )
        projects_qs = projects_qs.annotate(
            unread=Count("messages", filter=_unread_filter(actor)),
            last_message_at=Max("messages__created_at"),
        )

        threads = []
        for obj in requests_qs:
            threads.append(
                {
                    "thread": _key_payload(resolve_thread_key(obj)),
                    "title": obj.name,
                    "status": obj.status,
                    "unread_count": obj.unread,
                    "last_message_at": obj.last_message_at,
                    "updated_at": obj.updated_at,
                }
            )
        for obj in projects_qs:
            threads.append(
                {
                    "thread": _key_payload(resolve_thread_key(obj)),
                    "title": obj.title,
                    "status": obj.status,
                    "unread_count": obj.unread,
                    "last_message_at": obj.last_message_at,
                    "updated_at": obj.updated_at,
                }
            )
        threads.sort(key=lambda t: t["last_message_at"] or t["updated_at"], reverse=True)
        return Response(threads, status=status.HTTP_200_OK)
