import logging

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from bookings.models import Booking

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Moves CONFIRMED bookings whose end_date has passed to COMPLETED, making them reviewable."

    def add_arguments(self, parser):
        parser.add_argument("--batch-size", type=int, default=500, help="Bookings updated per transaction (default 500).")
        parser.add_argument("--dry-run", action="store_true", help="Only report what would be completed.")

    def handle(self, *args, **options):
        batch_size = options["batch_size"]
        today = timezone.localdate()
        finished = Booking.objects.filter(status=Booking.Status.CONFIRMED, end_date__lt=today)

        total = finished.count()
        if total == 0:
            self.stdout.write(self.style.SUCCESS("No bookings to complete."))
            return

        if options["dry_run"]:
            sample = list(finished.order_by("end_date").values_list("id", flat=True)[:10])
            self.stdout.write(self.style.WARNING(f"[DRY RUN] {total} bookings would be completed, first ids: {sample}"))
            return

        completed = 0
        while True:
            ids = list(finished.order_by("id").values_list("id", flat=True)[:batch_size])
            if not ids:
                break
            with transaction.atomic():
                # status is re-checked so a booking cancelled meanwhile is left alone
                completed += Booking.objects.filter(id__in=ids, status=Booking.Status.CONFIRMED).update(
                    status=Booking.Status.COMPLETED,
                    completed_at=timezone.now(),
                    updated_at=timezone.now(),
                )
            self.stdout.write(f"Completed {completed}/{total} ...")

        logger.info("Finished bookings completed count=%s", completed)
        self.stdout.write(self.style.SUCCESS(f"Done. Completed {completed} bookings."))
