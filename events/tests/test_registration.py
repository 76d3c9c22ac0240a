import datetime

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from events.models import Event, EventRegistration
from notifications.models import Notification

User = get_user_model()


class EventApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.faculty = User.objects.create_user(username="faculty", password="pass")
        self.colleague = User.objects.create_user(username="colleague", password="pass")
        self.iqac = User.objects.create_user(username="iqac", password="pass", role="iqac")

        self.event = Event.objects.create(
            title="Outcome Based Education FDP",
            event_type=Event.TYPE_FDP,
            start_date=datetime.date(2026, 11, 10),
            end_date=datetime.date(2026, 11, 14),
            venue="Seminar Hall",
            organizer="IQAC Cell",
            max_participants=1,
        )

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def register_url(self, event):
        return f"/api/events/{event.id}/register/"

    def test_list_active_events_by_start_date(self):
        Event.objects.create(
            title="Earlier",
            start_date=datetime.date(2026, 11, 1),
            end_date=datetime.date(2026, 11, 1),
        )
        Event.objects.create(
            title="Hidden",
            start_date=datetime.date(2026, 10, 1),
            end_date=datetime.date(2026, 10, 1),
            status=Event.STATUS_INACTIVE,
        )
        self.auth(self.faculty)

        resp = self.client.get("/api/events/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([e["title"] for e in resp.json()], ["Earlier", "Outcome Based Education FDP"])

    def test_register_increments_count_and_notifies(self):
        self.auth(self.faculty)

        resp = self.client.post(self.register_url(self.event))

        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["event_id"], self.event.id)
        self.event.refresh_from_db()
        self.assertEqual(self.event.registered_count, 1)
        self.assertTrue(EventRegistration.objects.filter(event=self.event, user=self.faculty).exists())
        self.assertEqual(Notification.objects.get(user=self.faculty).title, "Event Registration")

    def test_duplicate_registration_is_rejected(self):
        self.event.max_participants = 0
        self.event.save()
        self.auth(self.faculty)

        self.client.post(self.register_url(self.event))
        resp = self.client.post(self.register_url(self.event))

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(resp.json()["success"])
        self.assertEqual(resp.json()["status_code"], 409)
        self.event.refresh_from_db()
        self.assertEqual(self.event.registered_count, 1)
        self.assertEqual(EventRegistration.objects.filter(event=self.event).count(), 1)

    def test_full_event_is_rejected(self):
        self.auth(self.faculty)
        self.client.post(self.register_url(self.event))

        self.auth(self.colleague)
        resp = self.client.post(self.register_url(self.event))

        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["errors"], {"detail": ["Event is full."]})
        self.event.refresh_from_db()
        self.assertEqual(self.event.registered_count, 1)
        self.assertFalse(EventRegistration.objects.filter(user=self.colleague).exists())

    def test_unlimited_capacity(self):
        self.event.max_participants = 0
        self.event.save()

        for user in (self.faculty, self.colleague, self.iqac):
            self.auth(user)
            self.assertEqual(self.client.post(self.register_url(self.event)).status_code, status.HTTP_201_CREATED)

        self.event.refresh_from_db()
        self.assertEqual(self.event.registered_count, 3)

    def test_unknown_or_inactive_event(self):
        self.auth(self.faculty)
        resp = self.client.post("/api/events/999999/register/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["errors"], {"detail": "Event not found."})

        self.event.status = Event.STATUS_INACTIVE
        self.event.save()
        resp = self.client.post(self.register_url(self.event))
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(resp.json()["success"])

    def test_my_registrations(self):
        other_event = Event.objects.create(
            title="Research Ethics Seminar",
            start_date=datetime.date(2026, 12, 1),
            end_date=datetime.date(2026, 12, 1),
        )
        self.auth(self.faculty)
        self.client.post(self.register_url(self.event))
        self.client.post(self.register_url(other_event))

        data = self.client.get("/api/events/me/registrations/").json()

        self.assertEqual(data["event_ids"], sorted([self.event.id, other_event.id]))
        self.assertEqual(len(data["registrations"]), 2)

    def test_only_reviewers_create_events(self):
        payload = {
            "title": "NAAC Orientation",
            "event_type": "seminar",
            "start_date": "2026-12-05",
            "end_date": "2026-12-05",
            "max_participants": 50,
        }

        self.auth(self.faculty)
        self.assertEqual(self.client.post("/api/events/", payload, format="json").status_code, status.HTTP_403_FORBIDDEN)

        self.auth(self.iqac)
        resp = self.client.post("/api/events/", payload, format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["registered_count"], 0)
        self.assertEqual(Event.objects.get(title="NAAC Orientation").created_by, self.iqac)

    def test_event_dates_are_validated(self):
        self.auth(self.iqac)
        resp = self.client.post(
            "/api/events/",
            {"title": "Backwards", "start_date": "2026-12-05", "end_date": "2026-12-01"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
