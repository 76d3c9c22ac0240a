from rest_framework import serializers

from core.sanitizers import sanitize_description, sanitize_title
from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    certificate_id = serializers.CharField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    submitted_by = serializers.CharField(source="user.username", read_only=True)
    reviewed_by = serializers.CharField(source="reviewed_by.username", read_only=True, default=None)

    class Meta:
        model = Activity
        fields = [
            "id",
            "user_id",
            "submitted_by",
            "title",
            "type",
            "role",
            "provider",
            "mode",
            "start_date",
            "end_date",
            "hours",
            "description",
            "status",
            "score",
            "evidence_urls",
            "certificate_id",
            "certificate_url",
            "certificate_issued_at",
            "created_at",
            "reviewed_by",
            "reviewed_at",
            "review_comment",
        ]
        read_only_fields = fields


class ActivitySubmitSerializer(serializers.ModelSerializer):
    """
    Submission form. Everything except the description is required; score,
    status and evidence are set by the server.
    """
    hours = serializers.IntegerField(min_value=0)
    description = serializers.CharField(required=False, allow_blank=True, default="")

    class Meta:
        model = Activity
        fields = [
            "title",
            "type",
            "role",
            "provider",
            "mode",
            "start_date",
            "end_date",
            "hours",
            "description",
        ]

    def validate_title(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Title is required.")
        return value

    def validate_provider(self, value):
        value = sanitize_title(value)
        if not value:
            raise serializers.ValidationError("Provider / organizer is required.")
        return value

    def validate_description(self, value):
        return sanitize_description(value)

    def validate(self, attrs):
        if attrs["end_date"] < attrs["start_date"]:
            raise serializers.ValidationError({"end_date": "End date cannot be before start date."})
        return attrs


class ReviewSerializer(serializers.Serializer):
    comment = serializers.CharField(required=False, allow_blank=True, default="", max_length=2000)
