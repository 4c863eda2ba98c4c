"""Services app models.

Defines the Service model, a catalog entry (gig) sold on the marketplace.
Services have their own active/inactive lifecycle managed through the CMS and
are not part of the order lifecycle.
"""

from django.core.validators import MinValueValidator
from django.db import models


class Service(models.Model):
    """Represents a purchasable catalog service."""

    class Category(models.TextChoices):
        WEB = "web", "Web Platform"
        MOBILE = "mobile", "Mobile App"
        AI = "ai", "AI Solution"
        DESIGN = "design", "Product Design"
        DEVOPS = "devops", "DevOps & Cloud"
        CONSULT = "consult", "Consulting"

    class Status(models.TextChoices):
        ACTIVE = "active", "active"
        INACTIVE = "inactive", "inactive"

    category = models.CharField(max_length=20, choices=Category.choices)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(0)]
    )
    features = models.JSONField(default=list, blank=True)
    image = models.URLField(blank=True, default="")
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.ACTIVE
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "services"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.title} (#{self.pk})"


def category_label(category: str) -> str:
    """Human label for a category id; unknown ids are returned unchanged."""
    return dict(Service.Category.choices).get(category, category)
