from django.contrib import admin
from django.utils.html import format_html
from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """
    Project overview:
    - List: id, title, status badge, client, amount, created
    - Filter: status, created (date hierarchy)
    - Search: title, client username
    - Amount and origin are read-only; status moves happen on the board
    """
    list_display = (
        "id",
        "title",
        "status_badge",
        "client_username",
        "amount",
        "created_at",
        "updated_at",
    )
    list_select_related = ("client__user",)
    list_filter = ("status", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("title", "client__user__username")

    readonly_fields = (
        "status",
        "client",
        "service",
        "source_request",
        "title",
        "description",
        "amount",
        "created_at",
        "updated_at",
    )

    def status_badge(self, obj):
        color = {
            "pending": "#f97316",
            "in_progress": "#0ea5e9",
            "review": "#a855f7",
            "completed": "#22c55e",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.get_status_display(),
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"

    def client_username(self, obj):
        return obj.client.user.username if obj.client_id else ""
    client_username.short_description = "client"
