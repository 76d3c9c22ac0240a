# activities/tasks.py

import logging

from celery import shared_task

from .models import Activity
from .services import issue_certificate

logger = logging.getLogger("fdp.activities")


@shared_task
def issue_certificate_task(activity_id: str):
    """
    Async certificate issuance for one approved activity.
    Safe to run more than once: an issued certificate is never regenerated.
    """
    try:
        activity = Activity.objects.select_related("user").get(pk=activity_id)
    except Activity.DoesNotExist:
        return "activity_not_found"

    if not activity.needs_certificate:
        return "not_needed"

    try:
        issued = issue_certificate(activity)
    except Exception:
        # Don't kill worker if generation fails; the watcher sweep retries
        logger.exception(f"Certificate task failed for activity {activity_id}")
        return "failed"

    return "certificate_issued" if issued else "already_issued"
