# notifications/services.py
import logging

from .models import Notification

logger = logging.getLogger("fdp.notifications")


def notify(user, title: str, message: str, severity: str = Notification.SEVERITY_INFO) -> Notification:
    """
    Append an unread notification for one user.
    """
    notification = Notification.objects.create(
        user=user,
        title=title,
        message=message,
        severity=severity,
    )
    logger.info(f"Notification {notification.id} ({severity}) sent to user {user.pk}: {title}")
    return notification


def mark_read(user, notification_id) -> bool:
    """
    Flip one notification to read. Unknown ids and other users'
    notifications are ignored. Returns True if a row changed.
    """
    updated = Notification.objects.filter(
        id=notification_id,
        user=user,
        is_read=False,
    ).update(is_read=True)
    return updated > 0


def mark_all_read(user, ids=None) -> int:
    qs = Notification.objects.filter(user=user, is_read=False)

    if ids:
        qs = qs.filter(id__in=ids)

    return qs.update(is_read=True)


def get_notifications(user, unread_only: bool = False, limit: int | None = None):
    qs = Notification.objects.filter(user=user).order_by("-created_at", "-id")
    if unread_only:
        qs = qs.filter(is_read=False)
    if limit:
        qs = qs[:limit]
    return qs


def unread_count(user) -> int:
    return Notification.objects.filter(user=user, is_read=False).count()
