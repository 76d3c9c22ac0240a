from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status

from .serializers import MarkReadSerializer, NotificationSerializer
from . import services


class MyNotificationsView(APIView):
    """
    GET /api/notifications/me/
    GET /api/notifications/me/?unread=true
    POST /api/notifications/me/  (mark read)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        unread_only = request.query_params.get("unread", "").lower() in ("1", "true", "yes")
        qs = services.get_notifications(request.user, unread_only=unread_only)

        serializer = NotificationSerializer(qs, many=True)
        return Response({
            "unread_count": services.unread_count(request.user),
            "notifications": serializer.data,
        })

    def post(self, request):
        """
        Mark notifications as read.

        Body:
        {
          "ids": [1, 2, 3]   # or omit/empty to mark all as read
        }
        """
        serializer = MarkReadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = services.mark_all_read(request.user, ids=serializer.validated_data["ids"])
        return Response({"marked_read": updated}, status=status.HTTP_200_OK)


class MarkNotificationReadView(APIView):
    """
    POST /api/notifications/<id>/read/
    Always 200: a notification that is missing or not yours is a no-op.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, notification_id):
        changed = services.mark_read(request.user, notification_id)
        return Response({"marked_read": 1 if changed else 0}, status=status.HTTP_200_OK)
