from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework import status
from django.db import transaction
from django.db.models import F
import logging

from core.exceptions import AlreadyRegistered
from events.models import Event, EventRegistration
from events.serializers import RegistrationSerializer
from notifications.models import Notification
from notifications.services import notify

logger = logging.getLogger('fdp.events')


class RegisterEventView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request, event_id):
        # Check if already registered (outside transaction for fast fail)
        if EventRegistration.objects.filter(event_id=event_id, user=request.user).exists():
            raise AlreadyRegistered()

        with transaction.atomic():
            # Lock the event row so the capacity check and increment are one step
            try:
                event = Event.objects.select_for_update().get(pk=event_id)
            except Event.DoesNotExist:
                raise NotFound("Event not found.")

            if event.status != Event.STATUS_ACTIVE:
                raise ValidationError({"detail": "Registration is closed for this event."})

            # Re-check registration inside transaction
            if EventRegistration.objects.filter(event=event, user=request.user).exists():
                raise AlreadyRegistered()

            if event.is_full:
                logger.warning(
                    f"Registration failed: event {event_id} is full "
                    f"({event.registered_count}/{event.max_participants})"
                )
                raise ValidationError({"detail": "Event is full."})

            reg = EventRegistration.objects.create(event=event, user=request.user)
            Event.objects.filter(pk=event.pk).update(registered_count=F("registered_count") + 1)

            logger.info(f"Registration created: user={request.user.id}, event={event_id}")

        notify(
            request.user,
            "Event Registration",
            f'You are registered for "{event.title}".',
            Notification.SEVERITY_SUCCESS,
        )

        return Response(RegistrationSerializer(reg).data, status=status.HTTP_201_CREATED)


class MyRegistrationsView(APIView):
    """
    GET /api/events/me/registrations/

    Returns the caller's registrations plus the bare list of event ids,
    which is what the events page needs to mark "Registered" buttons.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        regs = (
            EventRegistration.objects
            .filter(user=request.user)
            .select_related("event")
            .order_by("-registered_at")
        )
        return Response({
            "event_ids": sorted({reg.event_id for reg in regs}),
            "registrations": RegistrationSerializer(regs, many=True).data,
        })
