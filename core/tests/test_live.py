import datetime
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase

from activities.models import Activity
from core.live import LiveQuery

User = get_user_model()


class LiveQueryTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="faculty", password="pass")
        self.other = User.objects.create_user(username="other", password="pass")
        self.snapshots = []

        # Certificate issuance on approval is not under test here
        patcher = mock.patch("activities.tasks.issue_certificate_task")
        patcher.start()
        self.addCleanup(patcher.stop)

    def make(self, user, status=Activity.STATUS_APPROVED, title="Workshop"):
        return Activity.objects.create(
            user=user,
            title=title,
            type="workshop",
            role="participant",
            provider="NPTEL",
            mode="online",
            start_date=datetime.date(2026, 1, 1),
            end_date=datetime.date(2026, 1, 1),
            hours=4,
            status=status,
        )

    def on_snapshot(self, records):
        self.snapshots.append([record.pk for record in records])

    def query(self):
        return LiveQuery(Activity, order_by=["created_at"], user=self.user, status=Activity.STATUS_APPROVED)

    def test_initial_snapshot(self):
        existing = self.make(self.user)
        self.make(self.user, status=Activity.STATUS_PENDING)

        subscription = self.query().subscribe(self.on_snapshot)
        self.addCleanup(subscription.cancel)

        self.assertEqual(self.snapshots, [[existing.pk]])

    def test_change_delivers_full_result_set_after_commit(self):
        first = self.make(self.user)
        subscription = self.query().subscribe(self.on_snapshot, initial=False)
        self.addCleanup(subscription.cancel)

        with self.captureOnCommitCallbacks(execute=True):
            second = self.make(self.user)
            # Nothing is delivered before commit
            self.assertEqual(self.snapshots, [])

        self.assertEqual(len(self.snapshots), 1)
        self.assertCountEqual(self.snapshots[0], [first.pk, second.pk])

    def test_unrelated_changes_are_ignored(self):
        subscription = self.query().subscribe(self.on_snapshot, initial=False)
        self.addCleanup(subscription.cancel)

        with self.captureOnCommitCallbacks(execute=True):
            self.make(self.other)
            self.make(self.user, status=Activity.STATUS_PENDING)

        self.assertEqual(self.snapshots, [])

    def test_leaving_the_set_is_delivered(self):
        member = self.make(self.user)
        subscription = self.query().subscribe(self.on_snapshot)
        self.addCleanup(subscription.cancel)

        with self.captureOnCommitCallbacks(execute=True):
            member.delete()

        self.assertEqual(self.snapshots, [[member.pk], []])

    def test_cancel_stops_delivery_and_disconnects(self):
        query = self.query()
        subscription = query.subscribe(self.on_snapshot, initial=False)
        self.assertEqual(query.subscriber_count, 1)

        subscription.cancel()
        subscription.cancel()
        self.assertEqual(query.subscriber_count, 0)
        self.assertFalse(subscription.active)

        with self.captureOnCommitCallbacks(execute=True):
            self.make(self.user)

        self.assertEqual(self.snapshots, [])

    def test_refresh_only_delivers_on_change(self):
        query = self.query()
        with query.subscribe(self.on_snapshot):
            self.assertFalse(query.refresh())

            # Written with update(), so no signal fires
            pending = self.make(self.user, status=Activity.STATUS_PENDING)
            Activity.objects.filter(pk=pending.pk).update(status=Activity.STATUS_APPROVED)

            self.assertTrue(query.refresh())
            self.assertTrue(query.refresh(force=True))

        self.assertEqual(self.snapshots, [[], [pending.pk], [pending.pk]])

    def test_failing_subscriber_does_not_block_others(self):
        def broken(records):
            raise RuntimeError("boom")

        query = self.query()
        first = query.subscribe(broken, initial=False)
        second = query.subscribe(self.on_snapshot, initial=False)
        self.addCleanup(first.cancel)
        self.addCleanup(second.cancel)

        with self.captureOnCommitCallbacks(execute=True):
            created = self.make(self.user)

        self.assertEqual(self.snapshots, [[created.pk]])
