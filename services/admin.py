from django.contrib import admin
from django.utils.html import format_html
from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    """
    Catalog management:
    - List: id, title, category, status badge, price, updated
    - Filter: status, category
    - Search: title, description
    """
    list_display = ("id", "title", "category", "status_badge", "price", "updated_at")
    list_filter = ("status", "category")
    search_fields = ("title", "description")
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at", "updated_at")

    def status_badge(self, obj):
        color = "#22c55e" if obj.status == Service.Status.ACTIVE else "#64748b"
        label = "Live" if obj.status == Service.Status.ACTIVE else "Draft"
        return format_html(
            '<span style="display:inline-block;padding:2px 8px;border-radius:999px;'
            'font-size:12px;font-weight:600;color:#fff;background:{};">{}</span>',
            color,
            label,
        )
    status_badge.short_description = "status"
    status_badge.admin_order_field = "status"
