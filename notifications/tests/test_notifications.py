from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from notifications.models import Notification, now_millis
from notifications.services import mark_all_read, mark_read, notify, unread_count

User = get_user_model()


class NotifyServiceTest(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="noti_user", password="pass")
        self.other = User.objects.create_user(username="other", password="pass")

    def test_notify_creates_unread_notification(self):
        before = now_millis()
        notification = notify(self.user, "Activity Approved", "Nice work", Notification.SEVERITY_SUCCESS)

        self.assertFalse(notification.is_read)
        self.assertEqual(notification.severity, "success")
        self.assertGreaterEqual(notification.created_at, before)
        self.assertLessEqual(notification.created_at, now_millis())

    def test_default_severity_is_info(self):
        self.assertEqual(notify(self.user, "Hello", "World").severity, "info")

    def test_no_deduplication(self):
        notify(self.user, "Same", "Same")
        notify(self.user, "Same", "Same")
        self.assertEqual(Notification.objects.filter(user=self.user).count(), 2)

    def test_mark_read(self):
        notification = notify(self.user, "Hello", "World")

        self.assertTrue(mark_read(self.user, notification.id))
        notification.refresh_from_db()
        self.assertTrue(notification.is_read)

        # Already read
        self.assertFalse(mark_read(self.user, notification.id))

    def test_mark_read_on_missing_or_foreign_is_a_no_op(self):
        foreign = notify(self.other, "Private", "Not yours")

        self.assertFalse(mark_read(self.user, 999999))
        self.assertFalse(mark_read(self.user, foreign.id))

        foreign.refresh_from_db()
        self.assertFalse(foreign.is_read)

    def test_mark_all_read(self):
        first = notify(self.user, "One", "1")
        notify(self.user, "Two", "2")
        notify(self.other, "Three", "3")

        self.assertEqual(mark_all_read(self.user, ids=[first.id]), 1)
        self.assertEqual(unread_count(self.user), 1)

        self.assertEqual(mark_all_read(self.user), 1)
        self.assertEqual(unread_count(self.user), 0)
        self.assertEqual(unread_count(self.other), 1)


class NotificationApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="noti_user", password="pass")
        self.other = User.objects.create_user(username="other", password="pass")

        self.older = Notification.objects.create(user=self.user, title="System notice", message="Welcome", created_at=1000)
        self.newer = Notification.objects.create(user=self.user, title="Event update", message="Details", created_at=2000)
        self.foreign = Notification.objects.create(user=self.other, title="Other user", message="Should not be seen")

        self.client.force_authenticate(user=self.user)

    def test_list_newest_first_with_unread_count(self):
        resp = self.client.get("/api/notifications/me/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        data = resp.json()
        self.assertEqual(data["unread_count"], 2)
        self.assertEqual([n["title"] for n in data["notifications"]], ["Event update", "System notice"])

    def test_unread_filter(self):
        mark_read(self.user, self.newer.id)

        data = self.client.get("/api/notifications/me/?unread=true").json()
        self.assertEqual([n["title"] for n in data["notifications"]], ["System notice"])
        self.assertEqual(data["unread_count"], 1)

    def test_mark_read_endpoint(self):
        resp = self.client.post(f"/api/notifications/{self.older.id}/read/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json(), {"marked_read": 1})

        resp = self.client.post(f"/api/notifications/{self.foreign.id}/read/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json(), {"marked_read": 0})
        self.foreign.refresh_from_db()
        self.assertFalse(self.foreign.is_read)

    def test_bulk_mark_read(self):
        resp = self.client.post("/api/notifications/me/", {"ids": [self.newer.id, self.foreign.id]}, format="json")
        self.assertEqual(resp.json(), {"marked_read": 1})

        resp = self.client.post("/api/notifications/me/", {}, format="json")
        self.assertEqual(resp.json(), {"marked_read": 1})
        self.assertEqual(unread_count(self.user), 0)

    def test_bulk_mark_read_with_form_body_uses_whole_ids(self):
        extra = [
            Notification.objects.create(user=self.user, title=f"Note {i}", message="")
            for i in range(12)
        ]
        target = extra[-1]

        resp = self.client.post("/api/notifications/me/", {"ids": str(target.id)})

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json(), {"marked_read": 1})
        read_ids = list(Notification.objects.filter(is_read=True).values_list("id", flat=True))
        self.assertEqual(read_ids, [target.id])

    def test_bulk_mark_read_rejects_non_integer_ids(self):
        resp = self.client.post("/api/notifications/me/", {"ids": ["abc"]}, format="json")

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.json()["success"])
        self.assertIn("ids", resp.json()["errors"])
        self.assertEqual(unread_count(self.user), 2)
