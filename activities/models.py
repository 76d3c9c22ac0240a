# activities/models.py
from django.conf import settings
from django.db import models
from django.utils.crypto import get_random_string

from core.constants import CERTIFICATE_ID_LENGTH, CERTIFICATE_ID_PREFIX

ACTIVITY_ID_LENGTH = 20
ACTIVITY_ID_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


def generate_activity_id() -> str:
    return get_random_string(ACTIVITY_ID_LENGTH, ACTIVITY_ID_CHARS)


def certificate_id_for(activity_id) -> str:
    """
    Human-facing certificate number, e.g. "aB3dE9kLmnop" -> "CERT-AB3DE9KL".
    """
    return f"{CERTIFICATE_ID_PREFIX}{str(activity_id)[:CERTIFICATE_ID_LENGTH].upper()}"


class Activity(models.Model):
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    TYPE_WORKSHOP = "workshop"
    TYPE_FDP = "fdp"
    TYPE_MOOC = "mooc"
    TYPE_CONFERENCE = "conference"
    TYPE_PUBLICATION = "publication"
    TYPE_PATENT = "patent"

    TYPE_CHOICES = [
        (TYPE_WORKSHOP, "Workshop"),
        (TYPE_FDP, "Faculty Development Program"),
        (TYPE_MOOC, "MOOC"),
        (TYPE_CONFERENCE, "Conference"),
        (TYPE_PUBLICATION, "Publication"),
        (TYPE_PATENT, "Patent"),
    ]

    ROLE_PARTICIPANT = "participant"
    ROLE_SPEAKER = "speaker"
    ROLE_ORGANIZER = "organizer"
    ROLE_AUTHOR = "author"

    ROLE_CHOICES = [
        (ROLE_PARTICIPANT, "Participant"),
        (ROLE_SPEAKER, "Speaker"),
        (ROLE_ORGANIZER, "Organizer"),
        (ROLE_AUTHOR, "Author"),
    ]

    MODE_ONLINE = "online"
    MODE_OFFLINE = "offline"
    MODE_HYBRID = "hybrid"

    MODE_CHOICES = [
        (MODE_ONLINE, "Online"),
        (MODE_OFFLINE, "Offline"),
        (MODE_HYBRID, "Hybrid"),
    ]

    id = models.CharField(
        primary_key=True,
        max_length=32,
        default=generate_activity_id,
        editable=False,
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="activities",
    )

    title = models.CharField(max_length=255)
    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    role = models.CharField(max_length=32, choices=ROLE_CHOICES)
    provider = models.CharField(max_length=255, help_text="Provider / organizing body")
    mode = models.CharField(max_length=16, choices=MODE_CHOICES)
    start_date = models.DateField()
    end_date = models.DateField()
    hours = models.PositiveIntegerField(default=0)
    description = models.TextField(blank=True, default="")

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING)
    score = models.IntegerField(default=0, help_text="Fixed at submission time")

    evidence_urls = models.JSONField(default=list, blank=True)

    # Set once, by the system, after approval
    certificate_url = models.CharField(max_length=1024, blank=True, null=True)
    certificate_issued_at = models.DateTimeField(blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)

    # Review metadata
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reviewed_activities",
    )
    reviewed_at = models.DateTimeField(blank=True, null=True)
    review_comment = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "activities"
        indexes = [
            models.Index(fields=["user", "status"], name="activity_user_status_idx"),
            models.Index(fields=["status", "-created_at"], name="activity_status_created_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"

    @property
    def certificate_id(self) -> str:
        return certificate_id_for(self.pk)

    @classmethod
    def awaiting_certificate(cls) -> models.Q:
        """Approved and without a certificate; blank counts as missing."""
        return models.Q(status=cls.STATUS_APPROVED) & (
            models.Q(certificate_url__isnull=True) | models.Q(certificate_url="")
        )

    @property
    def needs_certificate(self) -> bool:
        return self.status == self.STATUS_APPROVED and not self.certificate_url
