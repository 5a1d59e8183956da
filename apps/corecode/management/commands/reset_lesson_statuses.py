from django.core.management.base import BaseCommand

from apps.attendance.services import reset_lesson_statuses


class Command(BaseCommand):
    help = 'Reset lessons marked yesterday back to scheduled (runs without celery)'

    def handle(self, *args, **options):
        updated = reset_lesson_statuses()
        self.stdout.write(self.style.SUCCESS(f"Reset {updated} lesson(s) to scheduled"))
