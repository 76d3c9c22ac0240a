# activities/tests/test_certificates.py
import datetime
import shutil
import tempfile
from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import SimpleTestCase, TestCase, override_settings

from activities import services
from activities.certificate_generator import render_certificate
from activities.models import Activity
from activities.services import approve_activity, build_certificate_data, format_issue_date, issue_certificate
from activities.tasks import issue_certificate_task
from activities.watcher import CertificateWatcher, sweep_certificates
from notifications.models import Notification
from users.models import Profile

User = get_user_model()


def make_activity(user, **overrides):
    fields = {
        "user": user,
        "title": "National Conference on Data Science",
        "type": Activity.TYPE_CONFERENCE,
        "role": Activity.ROLE_SPEAKER,
        "provider": "IEEE",
        "mode": Activity.MODE_OFFLINE,
        "start_date": datetime.date(2026, 2, 10),
        "end_date": datetime.date(2026, 2, 11),
        "hours": 12,
        "score": 24,
        "status": Activity.STATUS_APPROVED,
    }
    fields.update(overrides)
    return Activity.objects.create(**fields)


class RenderCertificateTest(SimpleTestCase):
    def render(self, **overrides):
        data = {
            "faculty_name": "Dr. Meera Nair",
            "activity_title": "Advanced Pedagogy Workshop",
            "activity_type": "workshop",
            "duration": "16 hours",
            "issue_date": "March 7, 2026",
            "score": 10,
            "certificate_id": "CERT-AB3DE9KL",
        }
        data.update(overrides)
        return render_certificate(**data)

    def test_single_page_pdf(self):
        pdf = self.render()
        self.assertTrue(pdf.startswith(b"%PDF"))
        self.assertIn(b"/Count 1", pdf)
        self.assertIn(b"CERT-AB3DE9KL", pdf)

    def test_long_title_still_renders_one_page(self):
        pdf = self.render(activity_title="Very Long Programme Title " * 12)
        self.assertTrue(pdf.startswith(b"%PDF"))
        self.assertIn(b"/Count 1", pdf)

    def test_output_is_stable(self):
        self.assertEqual(self.render(), self.render())

    def test_issue_date_format(self):
        self.assertEqual(format_issue_date(datetime.date(2026, 3, 7)), "March 7, 2026")
        self.assertEqual(format_issue_date(datetime.date(2025, 12, 25)), "December 25, 2025")


class CertificateTestBase(TestCase):
    def setUp(self):
        self.temp_media = tempfile.mkdtemp(prefix="test_media_")
        self.media_override = override_settings(MEDIA_ROOT=self.temp_media)
        self.media_override.enable()

        self.faculty = User.objects.create_user(username="faculty", password="pass")
        self.other = User.objects.create_user(username="other", password="pass")
        self.hod = User.objects.create_user(username="hod", password="pass", role="hod")

    def tearDown(self):
        self.media_override.disable()
        shutil.rmtree(self.temp_media, ignore_errors=True)


class IssueCertificateTest(CertificateTestBase):
    def test_certificate_data_uses_profile_name(self):
        activity = make_activity(self.faculty)
        self.assertEqual(build_certificate_data(activity)["faculty_name"], "Faculty Member")

        Profile.objects.create(
            user=self.faculty,
            name="Dr. Meera Nair",
            email="meera@college.edu",
            department="CSE",
            phone="",
            designation="Professor",
            employee_id="",
        )
        data = build_certificate_data(activity)
        self.assertEqual(data["faculty_name"], "Dr. Meera Nair")
        self.assertEqual(data["duration"], "12 hours")
        self.assertEqual(data["score"], 24)
        self.assertEqual(data["certificate_id"], activity.certificate_id)

    def test_issues_once_for_approved_activity(self):
        activity = make_activity(self.faculty)

        self.assertTrue(issue_certificate(activity))

        activity.refresh_from_db()
        self.assertTrue(activity.certificate_url.endswith(f"certificates/{self.faculty.pk}/{activity.pk}.pdf"))
        self.assertIsNotNone(activity.certificate_issued_at)

        notification = Notification.objects.get(user=self.faculty)
        self.assertEqual(notification.title, "Certificate Generated")

    def test_second_pass_performs_no_upload(self):
        activity = make_activity(self.faculty)
        issue_certificate(activity)
        activity.refresh_from_db()
        first_url = activity.certificate_url

        with mock.patch.object(services, "upload_bytes") as upload:
            self.assertFalse(issue_certificate(activity))
            self.assertEqual(sweep_certificates(self.faculty), 0)
        upload.assert_not_called()

        activity.refresh_from_db()
        self.assertEqual(activity.certificate_url, first_url)
        self.assertEqual(Notification.objects.filter(user=self.faculty).count(), 1)

    def test_blank_certificate_url_counts_as_missing(self):
        activity = make_activity(self.faculty, certificate_url="")
        self.assertTrue(activity.needs_certificate)

        self.assertEqual(sweep_certificates(self.faculty), 1)

        activity.refresh_from_db()
        self.assertTrue(activity.certificate_url.endswith(f"{activity.pk}.pdf"))
        self.assertFalse(activity.needs_certificate)

    def test_pending_and_rejected_get_no_certificate(self):
        pending = make_activity(self.faculty, status=Activity.STATUS_PENDING)
        rejected = make_activity(self.faculty, status=Activity.STATUS_REJECTED)

        with mock.patch.object(services, "upload_bytes") as upload:
            self.assertFalse(issue_certificate(pending))
            self.assertFalse(issue_certificate(rejected))
        upload.assert_not_called()

    def test_losing_a_concurrent_claim_changes_nothing(self):
        activity = make_activity(self.faculty)

        def concurrent_upload(path, content, content_type):
            # Another issuer finishes first
            Activity.objects.filter(pk=activity.pk).update(certificate_url="/media/winner.pdf")
            return "/media/loser.pdf"

        with mock.patch.object(services, "upload_bytes", side_effect=concurrent_upload):
            self.assertFalse(issue_certificate(activity))

        activity.refresh_from_db()
        self.assertEqual(activity.certificate_url, "/media/winner.pdf")
        self.assertFalse(Notification.objects.exists())

    def test_sweep_continues_past_a_failure(self):
        first = make_activity(self.faculty, title="First")
        second = make_activity(self.faculty, title="Second")
        real_render = services.render_certificate

        def flaky_render(**data):
            if data["activity_title"] == "First":
                raise RuntimeError("font missing")
            return real_render(**data)

        with mock.patch.object(services, "render_certificate", side_effect=flaky_render):
            issued = sweep_certificates(self.faculty)

        self.assertEqual(issued, 1)
        first.refresh_from_db()
        second.refresh_from_db()
        self.assertIsNone(first.certificate_url)
        self.assertIsNotNone(second.certificate_url)

    def test_sweep_scoped_to_user(self):
        make_activity(self.faculty)
        make_activity(self.other)

        self.assertEqual(sweep_certificates(self.faculty), 1)
        self.assertEqual(Activity.objects.filter(certificate_url__isnull=True).count(), 1)
        self.assertEqual(sweep_certificates(), 1)

    def test_task_is_idempotent(self):
        activity = make_activity(self.faculty)

        self.assertEqual(issue_certificate_task(activity.pk), "certificate_issued")
        self.assertEqual(issue_certificate_task(activity.pk), "not_needed")
        self.assertEqual(issue_certificate_task("missing"), "activity_not_found")

    def test_management_command_runs_one_sweep(self):
        make_activity(self.faculty)
        out = StringIO()

        call_command("watch_certificates", "--user", "faculty", stdout=out)

        self.assertIn("Issued 1 certificate(s)", out.getvalue())


class CertificateWatcherTest(CertificateTestBase):
    def test_initial_snapshot_issues_missing_certificates(self):
        make_activity(self.faculty)
        make_activity(self.faculty, status=Activity.STATUS_PENDING)

        watcher = CertificateWatcher(self.faculty).start()
        try:
            self.assertTrue(watcher.running)
            self.assertEqual(watcher.issued, 1)
        finally:
            watcher.stop()

        self.assertFalse(watcher.running)

    def test_watcher_picks_up_new_approval(self):
        pending = make_activity(self.faculty, status=Activity.STATUS_PENDING)

        # Keep the approval hook out of the way so the watcher does the work
        with mock.patch("activities.tasks.issue_certificate_task"):
            with CertificateWatcher(self.faculty) as watcher:
                self.assertEqual(watcher.issued, 0)
                with self.captureOnCommitCallbacks(execute=True):
                    approve_activity(self.hod, pending.pk)
                self.assertEqual(watcher.issued, 1)

        pending.refresh_from_db()
        self.assertIsNotNone(pending.certificate_url)

    def test_stopped_watcher_ignores_changes(self):
        pending = make_activity(self.faculty, status=Activity.STATUS_PENDING)
        watcher = CertificateWatcher(self.faculty).start()
        watcher.stop()

        with mock.patch("activities.tasks.issue_certificate_task"):
            with self.captureOnCommitCallbacks(execute=True):
                approve_activity(self.hod, pending.pk)

        self.assertEqual(watcher.issued, 0)
        pending.refresh_from_db()
        self.assertIsNone(pending.certificate_url)

    def test_other_users_activities_are_ignored(self):
        with CertificateWatcher(self.faculty) as watcher:
            with mock.patch("activities.tasks.issue_certificate_task"):
                with self.captureOnCommitCallbacks(execute=True):
                    make_activity(self.other)
            self.assertEqual(watcher.issued, 0)
