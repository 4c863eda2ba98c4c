"""Projects app models.

Defines the Project model. A Project is a billable unit of work created either
by a catalog purchase (``service`` set) or by converting a paid custom request
(``source_request`` set). The amount is fixed at creation; only the delivery
status moves afterwards.
"""

from django.core.validators import MinValueValidator
from django.db import models

from clients.models import Client
from services.models import Service


class Project(models.Model):
    """Represents a paid project moving through the delivery pipeline."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        IN_PROGRESS = "in_progress", "In Progress"
        REVIEW = "review", "Review"
        COMPLETED = "completed", "Completed"

    client = models.ForeignKey(
        Client,
        on_delete=models.PROTECT,
        related_name="projects",
    )
    service = models.ForeignKey(
        Service,
        on_delete=models.PROTECT,
        related_name="projects",
        null=True,
        blank=True,
    )
    source_request = models.OneToOneField(
        "custom_requests.CustomRequest",
        on_delete=models.PROTECT,
        related_name="spawned_project",
        null=True,
        blank=True,
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    amount = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"Project<{self.id} {self.title} {self.status}>"
