from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver
import logging

from .models import Activity

logger = logging.getLogger('fdp.activities')


@receiver(post_save, sender=Activity)
def queue_certificate_on_approval(sender, instance, created, **kwargs):
    """Schedule certificate issuance once an approval is committed."""
    if not instance.needs_certificate:
        return

    from .tasks import issue_certificate_task

    activity_id = instance.pk

    def enqueue():
        try:
            issue_certificate_task.delay(activity_id)
        except Exception as e:
            # Broker down: the watch_certificates sweep picks it up later
            logger.warning(f"Could not queue certificate for activity {activity_id}: {e}")

    transaction.on_commit(enqueue)
    logger.info(f"Certificate queued for approved activity {activity_id}")
