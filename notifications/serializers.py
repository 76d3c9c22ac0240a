from rest_framework import serializers

from .models import Notification


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = ["id", "title", "message", "severity", "is_read", "created_at"]
        read_only_fields = fields


class MarkReadSerializer(serializers.Serializer):
    """
    Body of the bulk mark-read call. Omitted or empty `ids` means all.
    """
    ids = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, default=list)
