from django.core.management.base import BaseCommand

from apps.distributors.models import Distributor
from apps.distributors.services import LedgerService


class Command(BaseCommand):
    help = 'Check distributor running balances against ledger entries'

    def add_arguments(self, parser):
        parser.add_argument(
            '--distributor-id',
            type=int,
            help='Check a single distributor only',
        )
        parser.add_argument(
            '--fix',
            action='store_true',
            help='Rewrite balances and totals from the entries',
        )

    def handle(self, *args, **options):
        distributors = Distributor.objects.all()
        if options.get('distributor_id'):
            distributors = distributors.filter(pk=options['distributor_id'])

        drifted = 0
        for distributor in distributors:
            report = LedgerService.check_consistency(distributor)
            if report['consistent']:
                continue

            drifted += 1
            self.stdout.write(self.style.WARNING(
                f"{distributor.business_name} (#{distributor.pk}): stored balance "
                f"{report['stored_balance']}, expected {report['expected_balance']}, "
                f"{len(report['mismatched_entries'])} entries off"
            ))
            if options['fix']:
                LedgerService.reconcile(distributor)
                self.stdout.write(self.style.SUCCESS(f"Reconciled {distributor.business_name}"))

        self.stdout.write(self.style.SUCCESS(f'Ledger check complete. Distributors with drift: {drifted}'))
