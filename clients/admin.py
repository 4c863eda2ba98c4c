from django.contrib import admin
from .models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    """
    Client list with its own id and the linked user id.
    """
    list_display = ("id", "user_id_display", "user", "company_name", "created_at")
    list_select_related = ("user",)
    search_fields = ("user__username", "user__email", "company_name")
    list_filter = ("created_at",)
    ordering = ("-created_at", "-id")
    readonly_fields = ("created_at",)

    def user_id_display(self, obj):
        return obj.user_id
    user_id_display.short_description = "user id"
    user_id_display.admin_order_field = "user__id"
