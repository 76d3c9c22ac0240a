from django.contrib import admin
from .models import Event, EventRegistration


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('title', 'event_type', 'status', 'start_date', 'registered_count', 'max_participants')
    list_filter = ('status', 'event_type', 'start_date')
    search_fields = ('title', 'description', 'organizer', 'venue')
    date_hierarchy = 'start_date'


@admin.register(EventRegistration)
class EventRegistrationAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'status', 'registered_at')
    list_filter = ('status',)
    search_fields = ('user__username', 'event__title')
