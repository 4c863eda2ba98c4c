from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """
    Message overview:
    - List: id, thread, sender, sender type, read flag, created
    - Filter: sender type, read, created
    - Messages are append-only; everything is read-only
    """
    list_display = ("id", "thread", "sender", "sender_type", "read", "created_at")
    list_filter = ("sender_type", "read", "created_at")
    search_fields = ("text", "sender__username")
    ordering = ("-created_at", "-id")
    readonly_fields = ("project", "request", "sender", "sender_type", "text", "read", "created_at")

    def thread(self, obj):
        if obj.request_id:
            return f"request #{obj.request_id}"
        return f"project #{obj.project_id}"
