from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "event", "title", "level", "emailed", "read_at", "created_at")
    list_filter = ("level", "event", "emailed")
    search_fields = ("user__username", "user__email", "title")
    readonly_fields = ("created_at",)
