from django.core.management.base import BaseCommand, CommandError
from rest_framework.exceptions import NotFound

from tracker.services.assignments import assignments_with_remaining_days


class Command(BaseCommand):
    help = "Print assignments with their remaining treatment days."

    def add_arguments(self, parser):
        parser.add_argument('--patient', type=int, help='Only this patient id')
        parser.add_argument('--active', action='store_true', help='Skip treatments that have ended')

    def handle(self, *args, **options):
        try:
            items = assignments_with_remaining_days(options['patient'], active_only=options['active'])
        except NotFound as exc:
            raise CommandError(str(exc.detail)) from exc

        if not items:
            self.stdout.write('No assignments found')
            return
        for item in items:
            self.stdout.write(
                f"#{item['id']} {item['patient']['name']}: {item['medication']['name']} "
                f"{item['medication']['dosage']} from {item['startDate']} for {item['numberOfDays']}d "
                f"-> {item['remainingDays']} days left ({item['urgency']})"
            )
        self.stdout.write(self.style.SUCCESS(f'{len(items)} assignment(s)'))
