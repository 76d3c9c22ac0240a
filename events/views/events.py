from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework import status
from django.db.models import Q
import logging

from activities.permissions import IsReviewer
from events.models import Event
from events.serializers import EventSerializer

logger = logging.getLogger('fdp.events')


class EventListCreateView(APIView):
    """
    GET  /api/events/   -> active events, soonest first (?search=)
    POST /api/events/   -> create an event (HOD / IQAC only)
    """
    permission_classes = [IsAuthenticated]

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsReviewer()]
        return super().get_permissions()

    def get(self, request):
        qs = Event.objects.filter(status=Event.STATUS_ACTIVE)

        search = request.query_params.get("search")
        if search:
            qs = qs.filter(
                Q(title__icontains=search) |
                Q(description__icontains=search)
            )

        serializer = EventSerializer(qs.order_by("start_date", "id"), many=True)
        return Response(serializer.data)

    def post(self, request):
        serializer = EventSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = serializer.save(created_by=request.user)

        logger.info(f"Event created: event={event.id}, user={request.user.id}")
        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)
