from django.contrib import admin

from .models import EmailTemplate, OutboundEmail


@admin.register(EmailTemplate)
class EmailTemplateAdmin(admin.ModelAdmin):
    list_display = ("key", "language_code", "name", "is_active", "updated_at")
    list_filter = ("is_active", "language_code")
    search_fields = ("key", "name", "subject")
    ordering = ("key",)


@admin.register(OutboundEmail)
class OutboundEmailAdmin(admin.ModelAdmin):
    list_display = ("to_email", "template_key", "order",
                    "status", "created_at", "sent_at")
    list_filter = ("status", "template_key")
    search_fields = ("to_email", "subject", "template_key", "order__id")

    ordering = ("-created_at",)

    readonly_fields = (
        "order",
        "to_email",
        "template_key",
        "subject",
        "body_text",
        "body_html",
        "payload",
        "status",
        "error_message",
        "created_at",
        "sent_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
