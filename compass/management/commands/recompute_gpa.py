from django.contrib.auth.models import User
from django.core.management.base import BaseCommand

from compass.models import CourseTracker
from compass.services.course_tracker.service import recompute_all_trackers


class Command(BaseCommand):
    help = "Recompute semester GPAs, cumulative GPA and total credits for stored course trackers"

    def add_arguments(self, parser):
        parser.add_argument(
            "--user",
            type=int,
            help="Only recompute the tracker of this user ID",
        )

    def handle(self, *args, **options):
        user_id = options.get("user")
        if user_id is None:
            count = recompute_all_trackers()
            self.stdout.write(self.style.SUCCESS(f"Recomputed {count} course tracker(s)."))
            return

        if not User.objects.filter(id=user_id).exists():
            self.stderr.write(self.style.ERROR(f"User ID {user_id} not found"))
            return

        tracker = CourseTracker.objects.filter(user_id=user_id).first()
        if tracker is None:
            self.stdout.write(self.style.WARNING(f"User {user_id} has no course tracker."))
            return

        tracker.save()
        self.stdout.write(
            self.style.SUCCESS(
                f"Recomputed tracker for user={user_id} gpa={tracker.cumulative_gpa:.2f} credits={tracker.total_credits}"
            )
        )
