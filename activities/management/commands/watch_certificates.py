import time

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from activities.watcher import CertificateWatcher, sweep_certificates

User = get_user_model()


class Command(BaseCommand):
    help = "Issues certificates for approved activities that do not have one yet"

    def add_arguments(self, parser):
        parser.add_argument("--user", help="Username to watch (default: everyone)")
        parser.add_argument(
            "--interval",
            type=float,
            default=0,
            help="Keep polling every N seconds (default: run once and exit)",
        )

    def handle(self, *args, **options):
        user = None
        if options["user"]:
            try:
                user = User.objects.get(username=options["user"])
            except User.DoesNotExist:
                raise CommandError(f"No user named {options['user']!r}")

        interval = options["interval"]
        if interval <= 0:
            issued = sweep_certificates(user)
            self.stdout.write(self.style.SUCCESS(f"Issued {issued} certificate(s)"))
            return

        if user is not None:
            self._watch_user(user, interval)
        else:
            self._watch_everyone(interval)

    def _watch_user(self, user, interval):
        self.stdout.write(f"Watching approved activities of {user.username} every {interval}s")
        with CertificateWatcher(user) as watcher:
            try:
                while True:
                    time.sleep(interval)
                    watcher.poll()
            except KeyboardInterrupt:
                pass
        self.stdout.write(self.style.SUCCESS(f"Issued {watcher.issued} certificate(s)"))

    def _watch_everyone(self, interval):
        self.stdout.write(f"Sweeping approved activities every {interval}s")
        total = 0
        try:
            while True:
                total += sweep_certificates()
                time.sleep(interval)
        except KeyboardInterrupt:
            pass
        self.stdout.write(self.style.SUCCESS(f"Issued {total} certificate(s)"))
