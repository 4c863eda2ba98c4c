"""Clients app models.

Defines the Client model, the billing/ownership side of an authenticated user.
A Client is created lazily on the first purchase and links projects to the
user who paid for them.
"""

from django.conf import settings
from django.db import models


class Client(models.Model):
    """One-to-one link between a user account and project ownership."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="client",
    )
    company_name = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-created_at", "-id")

    def __str__(self):
        """Readable representation for admin and debugging."""
        return f"Client<{self.id} user={self.user_id}>"
