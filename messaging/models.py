"""Messaging app models.

Defines the Message model. A message belongs to exactly one thread: either a
custom request (``request``) or a project (``project``). Messages are
append-only and read in creation order.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q

from custom_requests.models import CustomRequest
from projects.models import Project


class Message(models.Model):
    """A single chat message between a client and the studio admins."""

    class SenderType(models.TextChoices):
        CLIENT = "client", "client"
        ADMIN = "admin", "admin"

    project = models.ForeignKey(
        Project,
        on_delete=models.PROTECT,
        related_name="messages",
        null=True,
        blank=True,
    )
    request = models.ForeignKey(
        CustomRequest,
        on_delete=models.PROTECT,
        related_name="messages",
        null=True,
        blank=True,
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="messages_sent",
    )
    sender_type = models.CharField(max_length=10, choices=SenderType.choices)
    text = models.TextField()
    read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("created_at", "id")
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(project__isnull=False, request__isnull=True)
                    | Q(project__isnull=True, request__isnull=False)
                ),
                name="message_belongs_to_exactly_one_thread",
            )
        ]

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        thread = f"request={self.request_id}" if self.request_id else f"project={self.project_id}"
        return f"Message<{self.id} {thread} {self.sender_type}>"
