"""Custom requests app models.

Defines the CustomRequest model: a bespoke project inquiry submitted through
the public wizard. An admin reviews and prices it; the owning client then pays,
which converts it into a Project. Requests are never deleted.
"""

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from services.models import Service


class CustomRequest(models.Model):
    """Represents a client-submitted custom project request."""

    class Status(models.TextChoices):
        PENDING = "pending", "pending"
        REVIEWING = "reviewing", "reviewing"
        APPROVED = "approved", "approved"
        REJECTED = "rejected", "rejected"
        CONVERTED = "converted", "converted"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="custom_requests",
        null=True,
        blank=True,
    )
    category = models.CharField(max_length=20, choices=Service.Category.choices)
    name = models.CharField(max_length=200)
    email = models.EmailField()
    details = models.TextField(blank=True, default="")
    budget = models.CharField(max_length=50, blank=True, default="")
    timeline = models.CharField(max_length=50, blank=True, default="")
    attachment_name = models.CharField(max_length=255, blank=True, default="")

    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )
    approved_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(0)],
    )
    converted_project = models.OneToOneField(
        "projects.Project",
        on_delete=models.PROTECT,
        related_name="converted_from",
        null=True,
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self) -> str:
        """Readable representation for admin and debugging."""
        return f"CustomRequest<{self.id} {self.category} {self.status}>"
