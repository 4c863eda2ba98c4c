"""Thread key resolution.

Both sides of a conversation must land on the same thread. A custom request
talks on its own key; a project spawned from a request keeps talking on the
request's key, so history written before the payment stays visible after it.
Only projects bought straight from the catalog use a project key.
"""

from typing import NamedTuple

from custom_requests.models import CustomRequest
from projects.models import Project

from .models import Message


class ThreadKey(NamedTuple):
    field: str  # "request" or "project"
    id: int

    @property
    def column(self) -> str:
        return f"{self.field}_id"

    def filter_kwargs(self) -> dict:
        return {self.column: self.id}


def resolve_thread_key(entity) -> ThreadKey:
    """Return the thread key for a CustomRequest or a Project."""
    if isinstance(entity, CustomRequest):
        return ThreadKey("request", entity.pk)
    if isinstance(entity, Project):
        if entity.source_request_id:
            return ThreadKey("request", entity.source_request_id)
        return ThreadKey("project", entity.pk)
    raise TypeError(f"Cannot resolve a thread for {type(entity).__name__}.")


def thread_messages(key: ThreadKey):
    """All messages of a thread, oldest first."""
    return Message.objects.filter(**key.filter_kwargs()).order_by("created_at", "id")


def post_message(actor, key: ThreadKey, text: str) -> Message:
    """Append a message to the thread as the given actor."""
    return Message.objects.create(
        sender_id=actor.user_id,
        sender_type=actor.sender_type,
        text=text,
        read=False,
        **key.filter_kwargs(),
    )


def mark_thread_read(actor, key: ThreadKey) -> int:
    """Mark the other party's messages in a thread as read; return how many changed."""
    return (
        thread_messages(key)
        .filter(read=False)
        .exclude(sender_type=actor.sender_type)
        .update(read=True)
    )

