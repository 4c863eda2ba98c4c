"""Signal handlers for the messaging app.

Committed writes to messages, custom requests and projects are published on
the in-process change feed.
"""

from functools import partial

from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from custom_requests.models import CustomRequest
from projects.models import Project

from .models import Message
from .realtime import feed


@receiver(post_save, sender=Message)
def publish_message_change(sender, instance, **kwargs):
    transaction.on_commit(partial(feed.publish, "messages", instance))


@receiver(post_save, sender=CustomRequest)
def publish_request_change(sender, instance, **kwargs):
    transaction.on_commit(partial(feed.publish, "custom_requests", instance))


@receiver(post_save, sender=Project)
def publish_project_change(sender, instance, **kwargs):
    transaction.on_commit(partial(feed.publish, "projects", instance))
