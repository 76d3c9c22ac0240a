from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "user", "severity", "is_read", "created_at")
    list_filter = ("severity", "is_read")
    search_fields = ("title", "message", "user__username")
