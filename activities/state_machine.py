# activities/state_machine.py
"""
Review state machine for activities.

pending → approved
        └→ rejected

Approved and rejected are terminal. Any transition not in
VALID_TRANSITIONS is rejected.
"""
from typing import Tuple
import logging

from .models import Activity

logger = logging.getLogger('fdp.activities')


# Valid state transitions: from_status -> list of allowed to_statuses
VALID_TRANSITIONS = {
    Activity.STATUS_PENDING: [Activity.STATUS_APPROVED, Activity.STATUS_REJECTED],
    Activity.STATUS_APPROVED: [],
    Activity.STATUS_REJECTED: [],
}


def can_transition(activity: Activity, new_status: str) -> Tuple[bool, str]:
    """
    Check if an activity can move to a new status.

    Returns (can_transition: bool, reason: str)
    """
    current_status = activity.status

    if new_status not in dict(Activity.STATUS_CHOICES):
        return False, f"Invalid status: {new_status}"

    allowed = VALID_TRANSITIONS.get(current_status, [])

    if new_status not in allowed:
        return False, f"Cannot transition from '{current_status}' to '{new_status}'"

    return True, ""


def transition(activity: Activity, new_status: str, actor=None) -> Tuple[bool, str]:
    """
    Move an in-memory activity to a new status (caller saves).

    Returns (success: bool, message: str)
    """
    can, reason = can_transition(activity, new_status)

    if not can:
        logger.warning(
            f"Invalid state transition attempted: activity={activity.pk}, "
            f"from={activity.status}, to={new_status}, actor={getattr(actor, 'pk', 'unknown')}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_status = activity.status
    activity.status = new_status

    logger.info(
        f"Activity state transition: activity={activity.pk}, "
        f"from={old_status}, to={new_status}, actor={getattr(actor, 'pk', 'unknown')}"
    )

    return True, f"Transitioned from '{old_status}' to '{new_status}'"


def get_allowed_transitions(activity: Activity) -> list:
    return VALID_TRANSITIONS.get(activity.status, [])


def is_terminal_status(status: str) -> bool:
    return len(VALID_TRANSITIONS.get(status, [])) == 0
