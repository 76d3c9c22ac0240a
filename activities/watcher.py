# activities/watcher.py
import logging

from core.live import LiveQuery

from .models import Activity
from .services import issue_pending_certificates

logger = logging.getLogger("fdp.activities")


class CertificateWatcher:
    """
    Keeps one user's approved activities supplied with certificates.

    Subscribes to the live set of the user's approved activities and, on
    every snapshot, issues a certificate for each record that lacks one.

        watcher = CertificateWatcher(user)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(self, user):
        self.user = user
        self.query = LiveQuery(
            Activity,
            order_by=["created_at"],
            user=user,
            status=Activity.STATUS_APPROVED,
        )
        self.subscription = None
        self.issued = 0

    @property
    def running(self) -> bool:
        return self.subscription is not None and self.subscription.active

    def start(self):
        if self.running:
            return self
        self.subscription = self.query.subscribe(self.on_snapshot)
        logger.info(f"Certificate watcher started for user {self.user.pk}")
        return self

    def stop(self):
        if self.subscription is not None:
            self.subscription.cancel()
            self.subscription = None
            logger.info(f"Certificate watcher stopped for user {self.user.pk}")

    def poll(self) -> bool:
        """Pick up changes written by other processes."""
        return self.query.refresh(force=True)

    def on_snapshot(self, activities):
        issued = issue_pending_certificates(activities)
        if issued:
            self.issued += issued
            logger.info(f"Watcher issued {issued} certificate(s) for user {self.user.pk}")

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.stop()


def sweep_certificates(user=None) -> int:
    """
    One-shot pass over approved activities without a certificate, for one
    user or everyone.
    """
    qs = Activity.objects.select_related("user").filter(
        Activity.awaiting_certificate(),
    ).order_by("created_at")
    if user is not None:
        qs = qs.filter(user=user)
    return issue_pending_certificates(qs)
