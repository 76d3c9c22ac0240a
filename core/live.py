# core/live.py
"""
Live queries: register interest in a filtered set of records and receive
the full current result set every time it changes.

    query = LiveQuery(Activity, user=user, status=Activity.STATUS_APPROVED)
    subscription = query.subscribe(on_snapshot)
    ...
    subscription.cancel()

Changes made in this process are pushed through Django model signals once
the surrounding transaction commits. Changes made by other processes are
picked up by calling `refresh()` (e.g. from a polling loop).
"""
import itertools
import logging
from typing import Callable, List

from django.db import transaction
from django.db.models.signals import post_delete, post_save

logger = logging.getLogger("fdp.live")

_uid_counter = itertools.count(1)


class Subscription:
    """
    Cancellation handle returned by `LiveQuery.subscribe`.
    """

    def __init__(self, query: "LiveQuery", callback: Callable[[list], None]):
        self.query = query
        self.callback = callback
        self.active = True

    def cancel(self):
        if not self.active:
            return
        self.active = False
        self.query._remove(self)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()


class LiveQuery:
    """
    A model query with equality filters whose subscribers are called with
    the complete, current result set on every change.
    """

    def __init__(self, model, order_by=None, **filters):
        self.model = model
        self.filters = filters
        self.order_by = order_by or ["-pk"]
        self._subscriptions: List[Subscription] = []
        self._last_ids = None
        self._dispatch_uid = f"live-query-{model._meta.label_lower}-{next(_uid_counter)}"

    def queryset(self):
        return self.model.objects.filter(**self.filters).order_by(*self.order_by)

    def snapshot(self) -> list:
        records = list(self.queryset())
        self._last_ids = {record.pk for record in records}
        return records

    def subscribe(self, callback: Callable[[list], None], initial: bool = True) -> Subscription:
        """
        Register `callback`. With `initial=True` it is called right away
        with the current result set, like the first snapshot of a listener.
        """
        subscription = Subscription(self, callback)
        if not self._subscriptions:
            self._connect()
        self._subscriptions.append(subscription)

        if initial:
            self._deliver(self.snapshot(), [subscription])
        elif self._last_ids is None:
            self._last_ids = set(self.queryset().values_list("pk", flat=True))

        return subscription

    def refresh(self, force: bool = False) -> bool:
        """
        Re-run the query and notify subscribers if membership changed.
        Returns True when a snapshot was delivered.
        """
        previous = self._last_ids
        records = self.snapshot()
        if not force and previous is not None and previous == self._last_ids:
            return False
        self._deliver(records, list(self._subscriptions))
        return True

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    # -- internals --------------------------------------------------------

    def _connect(self):
        post_save.connect(self._on_change, sender=self.model, weak=False, dispatch_uid=self._dispatch_uid)
        post_delete.connect(self._on_change, sender=self.model, weak=False, dispatch_uid=self._dispatch_uid)

    def _disconnect(self):
        post_save.disconnect(sender=self.model, dispatch_uid=self._dispatch_uid)
        post_delete.disconnect(sender=self.model, dispatch_uid=self._dispatch_uid)

    def _remove(self, subscription: Subscription):
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)
        if not self._subscriptions:
            self._disconnect()

    def _on_change(self, sender, instance, **kwargs):
        was_member = self._last_ids is not None and instance.pk in self._last_ids
        # Deleted rows can only matter if they were part of the last snapshot
        if kwargs.get("signal") is post_delete and not was_member:
            return

        def deliver():
            if not self._subscriptions:
                return
            if not was_member and not self.queryset().filter(pk=instance.pk).exists():
                return
            self._deliver(self.snapshot(), list(self._subscriptions))

        transaction.on_commit(deliver)

    def _deliver(self, records: list, subscriptions: List[Subscription]):
        for subscription in subscriptions:
            if not subscription.active:
                continue
            try:
                subscription.callback(records)
            except Exception:
                logger.exception(
                    f"Live query subscriber failed for {self.model._meta.label} {self.filters}"
                )
