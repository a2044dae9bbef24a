import time

from django.core.management.base import BaseCommand

from floor.services.factory import build_booking_converter, build_booking_service


class Command(BaseCommand):
    help = "Convert bookings whose time has arrived into sessions."

    def add_arguments(self, parser):
        parser.add_argument(
            "--watch",
            action="store_true",
            help="Keep polling on the configured interval until interrupted.",
        )

    def handle(self, *args, **options):
        if not options["watch"]:
            result = build_booking_service().convert_due()
            self.stdout.write(
                f"Converted {len(result.converted)} booking(s), {len(result.failed)} not converted"
            )
            return

        converter = build_booking_converter()
        converter.start()
        self.stdout.write("Booking converter running, Ctrl+C to stop")
        try:
            while converter.running:
                time.sleep(1)
        except KeyboardInterrupt:
            pass
        finally:
            converter.stop()
