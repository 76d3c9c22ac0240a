# events/models.py
from django.conf import settings
from django.db import models


class Event(models.Model):
    """
    An institution-organized programme faculty can register for.
    """
    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
    ]

    TYPE_WORKSHOP = "workshop"
    TYPE_FDP = "fdp"
    TYPE_SEMINAR = "seminar"
    TYPE_CONFERENCE = "conference"
    TYPE_OTHER = "other"

    TYPE_CHOICES = [
        (TYPE_WORKSHOP, "Workshop"),
        (TYPE_FDP, "Faculty Development Program"),
        (TYPE_SEMINAR, "Seminar"),
        (TYPE_CONFERENCE, "Conference"),
        (TYPE_OTHER, "Other"),
    ]

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    event_type = models.CharField(max_length=32, choices=TYPE_CHOICES, default=TYPE_OTHER)
    start_date = models.DateField()
    end_date = models.DateField()
    venue = models.CharField(max_length=255, blank=True, default="")
    organizer = models.CharField(max_length=255, blank=True, default="")
    max_participants = models.PositiveIntegerField(default=0, help_text="0 means unlimited")
    registered_count = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_events",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["start_date"]
        indexes = [
            models.Index(fields=["status", "start_date"], name="event_status_start_idx"),
        ]

    def __str__(self):
        return self.title

    @property
    def is_full(self) -> bool:
        return self.max_participants > 0 and self.registered_count >= self.max_participants


class EventRegistration(models.Model):
    """
    One user's registration for one event.

    Uniqueness per (event, user) is checked by the register view, not by a
    database constraint.
    """
    STATUS_REGISTERED = "registered"

    STATUS_CHOICES = [
        (STATUS_REGISTERED, "Registered"),
    ]

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="event_registrations",
    )
    registered_at = models.DateTimeField(auto_now_add=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_REGISTERED)

    class Meta:
        indexes = [
            models.Index(fields=["event", "user"], name="reg_event_user_idx"),
        ]

    def __str__(self):
        return f"{self.user} -> {self.event}"
