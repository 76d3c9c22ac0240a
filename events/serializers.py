from rest_framework import serializers

from core.sanitizers import sanitize_description, sanitize_title
from .models import Event, EventRegistration


class EventSerializer(serializers.ModelSerializer):
    is_full = serializers.BooleanField(read_only=True)

    class Meta:
        model = Event
        fields = [
            "id",
            "title",
            "description",
            "event_type",
            "start_date",
            "end_date",
            "venue",
            "organizer",
            "max_participants",
            "registered_count",
            "is_full",
            "status",
            "created_at",
        ]
        read_only_fields = ["id", "registered_count", "is_full", "created_at"]

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value

    def validate_description(self, value):
        return sanitize_description(value)

    def validate_venue(self, value):
        return sanitize_title(value)

    def validate_organizer(self, value):
        return sanitize_title(value)

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date cannot be before start date."})
        return attrs


class RegistrationSerializer(serializers.ModelSerializer):
    event_id = serializers.IntegerField(read_only=True)
    event_title = serializers.CharField(source="event.title", read_only=True)

    class Meta:
        model = EventRegistration
        fields = ["id", "event_id", "event_title", "registered_at", "status"]
        read_only_fields = fields
