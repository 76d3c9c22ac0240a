# activities/reports.py
import csv

from django.conf import settings
from django.db.models import Count, Q, Sum
from django.http import HttpResponse
from django.utils import timezone

from .models import Activity

REPORT_COLUMNS = ["Title", "Type", "Provider", "Role", "Mode", "Start Date", "End Date", "Score", "Status"]


def get_activity_stats(user) -> dict:
    """
    Dashboard counters for one faculty member. Only approved activities
    count toward the score.
    """
    qs = Activity.objects.filter(user=user)
    counts = qs.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Activity.STATUS_PENDING)),
        approved=Count("id", filter=Q(status=Activity.STATUS_APPROVED)),
        rejected=Count("id", filter=Q(status=Activity.STATUS_REJECTED)),
        total_score=Sum("score", filter=Q(status=Activity.STATUS_APPROVED)),
    )
    total_score = counts["total_score"] or 0
    target = getattr(settings, "FDP_TARGET_SCORE", 100)
    progress = min(total_score / target * 100, 100) if target > 0 else 100

    return {
        "total": counts["total"],
        "pending": counts["pending"],
        "approved": counts["approved"],
        "rejected": counts["rejected"],
        "total_score": total_score,
        "target_score": target,
        "progress_percent": round(progress, 1),
    }


def build_activity_report(user) -> HttpResponse:
    """
    CSV export of the user's activities, oldest first.
    """
    activities = Activity.objects.filter(user=user).order_by("created_at")
    filename = f"activities-report-{timezone.now().date().isoformat()}.csv"

    response = HttpResponse(
        content_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

    writer = csv.writer(response)
    writer.writerow(REPORT_COLUMNS)

    for activity in activities:
        writer.writerow([
            activity.title,
            activity.type,
            activity.provider,
            activity.role,
            activity.mode,
            activity.start_date.isoformat(),
            activity.end_date.isoformat(),
            activity.score,
            activity.status,
        ])

    return response
