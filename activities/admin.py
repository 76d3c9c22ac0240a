from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ('title', 'user', 'type', 'role', 'status', 'score', 'created_at', 'certificate_issued_at')
    list_filter = ('status', 'type', 'role', 'mode')
    search_fields = ('title', 'provider', 'user__username', 'id')
    date_hierarchy = 'created_at'
    readonly_fields = ('id', 'score', 'created_at', 'certificate_url', 'certificate_issued_at')
