# activities/services.py
"""
Activity lifecycle: submission, review and certificate issuance.

Every operation takes the acting user explicitly; nothing reads a global
"current user".
"""
import logging

from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from core.exceptions import InvalidTransition
from core.storage import certificate_path, evidence_path, upload_bytes, upload_file
from notifications.models import Notification
from notifications.services import notify
from users.models import display_name_for

from .certificate_generator import render_certificate
from .models import Activity
from .scoring import compute_score
from .state_machine import transition

logger = logging.getLogger("fdp.activities")

DEFAULT_APPROVAL_COMMENT = "Approved"


# ---------------------------------------------------------------------------
# Submission
# ---------------------------------------------------------------------------

def submit_activity(actor, data: dict, evidence_files=()) -> Activity:
    """
    Create a pending activity for `actor` from validated form data.

    The record is written first so its id can key the evidence paths; the
    evidence list is filled in by a second write. There is no rollback: if
    an upload fails the pending record stays, without evidence, and the
    error propagates.
    """
    activity = Activity.objects.create(
        user=actor,
        title=data["title"],
        type=data["type"],
        role=data["role"],
        provider=data["provider"],
        mode=data["mode"],
        start_date=data["start_date"],
        end_date=data["end_date"],
        hours=data["hours"],
        description=data.get("description", ""),
        score=compute_score(data["type"], data["role"], data["hours"]),
        status=Activity.STATUS_PENDING,
        evidence_urls=[],
    )
    logger.info(f"Activity submitted: activity={activity.pk}, user={actor.pk}, score={activity.score}")

    if evidence_files:
        evidence_urls = [
            upload_file(evidence_path(actor.pk, activity.pk, uploaded.name), uploaded)
            for uploaded in evidence_files
        ]
        activity.evidence_urls = evidence_urls
        activity.save(update_fields=["evidence_urls"])
        logger.info(f"Attached {len(evidence_urls)} evidence file(s) to activity {activity.pk}")

    notify(
        actor,
        "Activity Submitted",
        f'Your {activity.type} "{activity.title}" has been submitted for review.',
        Notification.SEVERITY_SUCCESS,
    )
    return activity


# ---------------------------------------------------------------------------
# Review
# ---------------------------------------------------------------------------

def _ensure_reviewer(actor):
    if not getattr(actor, "is_reviewer", False):
        raise PermissionDenied("Only HOD or IQAC reviewers can review activities.")


def _review(actor, activity_id, new_status: str, comment: str, on_reviewed) -> Activity:
    """
    Lock, transition and save one activity. `on_reviewed(activity)` runs in
    the same transaction, so its writes land before any on-commit work
    triggered by the save.
    """
    with transaction.atomic():
        try:
            activity = Activity.objects.select_for_update().select_related("user").get(pk=activity_id)
        except Activity.DoesNotExist:
            raise NotFound("Activity not found.")

        ok, reason = transition(activity, new_status, actor=actor)
        if not ok:
            raise InvalidTransition(reason)

        activity.reviewed_by = actor
        activity.reviewed_at = timezone.now()
        activity.review_comment = comment
        activity.save(update_fields=["status", "reviewed_by", "reviewed_at", "review_comment"])
        on_reviewed(activity)

    return activity


def approve_activity(actor, activity_id, comment: str = "") -> Activity:
    """
    Approve a pending activity. The certificate is issued after commit by
    the post_save hook in activities.signals.
    """
    _ensure_reviewer(actor)
    comment = (comment or "").strip() or DEFAULT_APPROVAL_COMMENT

    def notify_owner(activity):
        notify(
            activity.user,
            "Activity Approved",
            f'Your activity "{activity.title}" has been approved! Certificate will be generated automatically.',
            Notification.SEVERITY_SUCCESS,
        )

    return _review(actor, activity_id, Activity.STATUS_APPROVED, comment, notify_owner)


def reject_activity(actor, activity_id, comment: str) -> Activity:
    _ensure_reviewer(actor)
    comment = (comment or "").strip()
    if not comment:
        raise ValidationError({"comment": "Please provide a reason for rejection."})

    def notify_owner(activity):
        notify(
            activity.user,
            "Activity Rejected",
            f'Your activity "{activity.title}" was rejected. Reason: {comment}',
            Notification.SEVERITY_ERROR,
        )

    return _review(actor, activity_id, Activity.STATUS_REJECTED, comment, notify_owner)


def review_queue(actor, status: str | None = None):
    """
    Every activity, newest first, for the HOD / IQAC review screen.
    """
    _ensure_reviewer(actor)
    qs = Activity.objects.select_related("user", "reviewed_by").order_by("-created_at")
    if status:
        qs = qs.filter(status=status)
    return qs


# ---------------------------------------------------------------------------
# Certificates
# ---------------------------------------------------------------------------

def format_issue_date(day) -> str:
    # e.g. "March 7, 2026"
    return f"{day:%B} {day.day}, {day.year}"


def build_certificate_data(activity: Activity) -> dict:
    return {
        "faculty_name": display_name_for(activity.user),
        "activity_title": activity.title,
        "activity_type": activity.type,
        "duration": f"{activity.hours or 0} hours",
        # Issue date is the generation date, not the approval date
        "issue_date": format_issue_date(timezone.now().date()),
        "score": activity.score or 0,
        "certificate_id": activity.certificate_id,
    }


def _awaiting_certificate(activity_id):
    return Activity.objects.filter(Activity.awaiting_certificate(), pk=activity_id)


def issue_certificate(activity: Activity) -> bool:
    """
    Render and store the certificate for an approved activity that has none.

    The upload path is deterministic, so two racing issuers overwrite the
    same object. The record itself is claimed with a conditional update and
    only the winner sets the URL and notifies the owner.

    Returns True if this call issued the certificate.
    """
    if not _awaiting_certificate(activity.pk).exists():
        return False

    data = build_certificate_data(activity)
    pdf_bytes = render_certificate(**data)

    url = upload_bytes(
        certificate_path(activity.user_id, activity.pk),
        pdf_bytes,
        "application/pdf",
    )

    issued_at = timezone.now()
    claimed = _awaiting_certificate(activity.pk).update(
        certificate_url=url,
        certificate_issued_at=issued_at,
    )
    if not claimed:
        logger.info(f"Certificate for activity {activity.pk} was issued concurrently; skipping")
        return False

    activity.certificate_url = url
    activity.certificate_issued_at = issued_at
    logger.info(f"Certificate {data['certificate_id']} issued for activity {activity.pk}")

    notify(
        activity.user,
        "Certificate Generated",
        f'Certificate for "{activity.title}" is ready to download.',
        Notification.SEVERITY_SUCCESS,
    )
    return True


def issue_pending_certificates(activities) -> int:
    """
    Issue certificates for every approved, certificate-less record in
    `activities`. A failure on one record is logged and the rest continue.
    Returns the number issued.
    """
    issued = 0
    for activity in activities:
        if not activity.needs_certificate:
            continue
        try:
            if issue_certificate(activity):
                issued += 1
        except Exception:
            logger.exception(f"Certificate generation failed for activity {activity.pk}")
    return issued
