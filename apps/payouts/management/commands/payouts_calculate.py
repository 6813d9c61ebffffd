from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.payouts.exceptions import PayoutError
from apps.payouts.management.commands._period import parse_month_option
from apps.payouts.services import calculate_payouts, previous_period


class Command(BaseCommand):
    help = "Aggregate a month's succeeded payments into pending educator payouts."

    def add_arguments(self, parser) -> None:
        parser.add_argument(
            "--month",
            default=None,
            help="Target month in YYYY-MM format (defaults to the previous calendar month).",
        )

    def handle(self, *args, **options):
        if options.get("month"):
            month, year = parse_month_option(options["month"])
        else:
            month, year = previous_period()

        try:
            records = calculate_payouts(month, year)
        except PayoutError as exc:
            raise CommandError(exc.message) from exc

        self.stdout.write(f"payouts_calculate {year}-{month:02d}:")
        for payout in records:
            self.stdout.write(
                f"- {payout.period_key} gross={payout.gross_cents} "
                f"commission={payout.commission_cents} payable={payout.amount_cents}"
            )
        self.stdout.write(self.style.SUCCESS(f"{len(records)} payout record(s) created or updated."))
