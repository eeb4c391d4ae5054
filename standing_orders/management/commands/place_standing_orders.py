from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from order_cycles.models import OrderCycle
from order_cycles.services import open_order_cycles
from standing_orders.exceptions import SelectionError
from standing_orders.placement import StandingOrderPlacementJob


class Command(BaseCommand):
    help = "Place standing (subscription) orders for an order cycle: cap to stock, complete checkout, email customers."

    def add_arguments(self, parser):
        target = parser.add_mutually_exclusive_group(required=True)
        target.add_argument(
            "--order-cycle",
            type=int,
            dest="order_cycle_id",
            help="Order cycle id to place standing orders for.",
        )
        target.add_argument(
            "--open",
            action="store_true",
            help="Place standing orders for every order cycle that is open now.",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print how many orders would be placed; do not change DB.",
        )

    def handle(self, *args, **options):
        dry_run: bool = bool(options.get("dry_run"))

        if options.get("open"):
            order_cycles = list(open_order_cycles())
            if not order_cycles:
                self.stdout.write("No open order cycles.")
                return
        else:
            oc = OrderCycle.objects.filter(id=options["order_cycle_id"]).first()
            if oc is None:
                raise CommandError(f"Order cycle {options['order_cycle_id']} not found")
            order_cycles = [oc]

        for oc in order_cycles:
            job = StandingOrderPlacementJob(oc)

            if dry_run:
                would_place = job.orders().count()
                self.stdout.write(self.style.WARNING(
                    f"dry-run: {oc} would place standing orders: {would_place}"))
                continue

            try:
                summary = job.run()
            except SelectionError as exc:
                raise CommandError(str(exc)) from exc

            msg = (
                f"{oc}: placed {len(summary.placed)}, failed {len(summary.failed)}, "
                f"skipped {len(summary.skipped)}, email failures {len(summary.notification_failed)}"
            )
            if summary.failed or summary.notification_failed:
                self.stdout.write(self.style.WARNING(msg))
            else:
                self.stdout.write(self.style.SUCCESS(msg))
