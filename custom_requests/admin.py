from django.contrib import admin
from django.utils.html import format_html
from .models import CustomRequest


@admin.register(CustomRequest)
class CustomRequestAdmin(admin.ModelAdmin):
    """
    Custom request overview:
    - List: id, name, email, category, status badge, approved price, created
    - Filter: status, category, created (date hierarchy)
    - Search: name, email, category
    - Read-only everywhere: status changes go through the review API so the
      lifecycle rules apply
    """
    list_display = (
        "id",
        "name",
        "email",
        "category",
        "status_badge",
        "approved_price",
        "created_at",
    )
    list_filter = ("status", "category", "created_at")
    date_hierarchy = "created_at"
    ordering = ("-created_at", "-id")
    search_fields = ("name", "email", "category")
    readonly_fields = (
        "user",
        "category",
        "name",
        "email",
        "details",
        "budget",
        "timeline",
        "attachment_name",
        "status",
        "approved_price",
        "converted_project",
        "created_at",
        "updated_at",
    )

    def status_badge(self, obj):
        color = {
            "pending": "#f97316",
            "reviewing": "#3b82f6",
            "approved": "#22c55e",
            "rejected": "#ef4444",
            "converted": "#a855f7",
        }.get(obj.status, "#9ca3af")
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            obj.status,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"
