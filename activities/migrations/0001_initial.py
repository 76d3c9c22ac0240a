import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import activities.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=activities.models.generate_activity_id,
                        editable=False,
                        max_length=32,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("workshop", "Workshop"),
                            ("fdp", "Faculty Development Program"),
                            ("mooc", "MOOC"),
                            ("conference", "Conference"),
                            ("publication", "Publication"),
                            ("patent", "Patent"),
                        ],
                        max_length=32,
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("participant", "Participant"),
                            ("speaker", "Speaker"),
                            ("organizer", "Organizer"),
                            ("author", "Author"),
                        ],
                        max_length=32,
                    ),
                ),
                ("provider", models.CharField(help_text="Provider / organizing body", max_length=255)),
                (
                    "mode",
                    models.CharField(
                        choices=[("online", "Online"), ("offline", "Offline"), ("hybrid", "Hybrid")],
                        max_length=16,
                    ),
                ),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("hours", models.PositiveIntegerField(default=0)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[("pending", "Pending"), ("approved", "Approved"), ("rejected", "Rejected")],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("score", models.IntegerField(default=0, help_text="Fixed at submission time")),
                ("evidence_urls", models.JSONField(blank=True, default=list)),
                ("certificate_url", models.CharField(blank=True, max_length=1024, null=True)),
                ("certificate_issued_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("review_comment", models.TextField(blank=True, default="")),
                (
                    "reviewed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reviewed_activities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "activities",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "status"], name="activity_user_status_idx"),
                    models.Index(fields=["status", "-created_at"], name="activity_status_created_idx"),
                ],
            },
        ),
    ]
