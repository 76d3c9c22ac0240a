# users/models.py
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models

from core.constants import ROLE_FACULTY, ROLE_HOD, ROLE_IQAC, REVIEWER_ROLES, DEFAULT_FACULTY_NAME


class User(AbstractUser):
    ROLE_CHOICES = (
        (ROLE_FACULTY, 'Faculty'),
        (ROLE_HOD, 'Head of Department'),
        (ROLE_IQAC, 'IQAC'),
    )

    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_FACULTY,
    )

    # Opaque id issued by the hosted auth provider (JWT "sub" claim)
    supabase_uid = models.CharField(max_length=64, unique=True, blank=True, null=True)

    @property
    def is_reviewer(self) -> bool:
        return self.role in REVIEWER_ROLES

    def __str__(self):
        return self.username


class Profile(models.Model):
    """
    Per-user settings page data. Created lazily on first save, upserted after.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="profile",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField()
    department = models.CharField(max_length=255)
    phone = models.CharField(max_length=20)
    designation = models.CharField(max_length=255)
    employee_id = models.CharField(max_length=64)
    photo_url = models.CharField(max_length=1024, blank=True, default="")

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.name} ({self.department})"


def display_name_for(user) -> str:
    """
    Name printed on certificates: the profile name if one was saved.
    """
    profile = Profile.objects.filter(user=user).only("name").first()
    if profile and profile.name.strip():
        return profile.name.strip()
    return DEFAULT_FACULTY_NAME
