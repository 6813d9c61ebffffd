from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from apps.payouts.exceptions import PayoutError
from apps.payouts.management.commands._period import parse_month_option
from apps.payouts.services import PayoutProcessor


class Command(BaseCommand):
    help = "Disburse eligible payouts sequentially for a month or an explicit list of ids."

    def add_arguments(self, parser) -> None:
        parser.add_argument("--month", default=None, help="Target month in YYYY-MM format.")
        parser.add_argument("--ids", nargs="+", type=int, default=None, help="Explicit payout ids.")
        parser.add_argument("--dry-run", action="store_true", default=False, help="List eligible payouts only.")

    def handle(self, *args, **options):
        payout_ids = options.get("ids")
        month = year = None
        if options.get("month"):
            month, year = parse_month_option(options["month"])
        if not payout_ids and month is None:
            raise CommandError("Provide --month or --ids.")

        processor = PayoutProcessor()
        try:
            if options["dry_run"]:
                payouts = processor.select_for_bulk(payout_ids=payout_ids, month=month, year=year)
                for payout in payouts:
                    self.stdout.write(f"- {payout.pk} {payout.period_key} amount={payout.amount_cents} {payout.status}")
                self.stdout.write(self.style.SUCCESS(f"{len(payouts)} payout(s) eligible."))
                return
            outcome = processor.process_bulk(payout_ids=payout_ids, month=month, year=year)
        except PayoutError as exc:
            raise CommandError(exc.message) from exc

        for item in outcome.results:
            marker = "ok" if item.success else "failed"
            self.stdout.write(f"- {item.payout_id} {marker} {item.status}: {item.message}")
        summary = outcome.summary
        line = f"total={summary['total']} succeeded={summary['succeeded']} failed={summary['failed']}"
        if outcome.aborted:
            raise CommandError(f"Run aborted: {outcome.abort_reason} ({line}, not_attempted={len(outcome.not_attempted)})")
        if summary["failed"]:
            self.stdout.write(self.style.WARNING(line))
        else:
            self.stdout.write(self.style.SUCCESS(line))
