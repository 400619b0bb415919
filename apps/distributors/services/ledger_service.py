"""
Distributor ledger bookkeeping.

Every write holds a row lock on the distributor so the running balance and
the distributor totals move together.
"""
import logging
from decimal import Decimal
from typing import Dict, Optional

from django.db import transaction

from apps.common.exceptions import ValidationFailed
from ..models import Distributor, DistributorLedgerEntry
from ..pricing import money

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')

ZERO = Decimal('0.00')


class LedgerService:
    """Service class for distributor ledger entries"""

    @staticmethod
    def _lock(distributor: Distributor) -> Distributor:
        return Distributor.objects.select_for_update().get(pk=distributor.pk)

    @staticmethod
    @transaction.atomic
    def add_entry(distributor: Distributor, entry_type: str, amount, order_type: str = '',
                  order_id: Optional[int] = None, payment_method: str = '', reference: str = '',
                  description: str = '', notes: str = '', created_by=None) -> DistributorLedgerEntry:
        """
        Append an entry. ``amount`` is the unsigned size of the movement;
        orders add to the balance and payments subtract from it.
        """
        amount = money(amount)
        if amount <= 0:
            raise ValidationFailed('Amount must be greater than zero')
        if entry_type not in dict(DistributorLedgerEntry.ENTRY_TYPES):
            raise ValidationFailed(f'Unknown ledger entry type: {entry_type}')

        distributor = LedgerService._lock(distributor)
        signed = amount if entry_type == 'order' else -amount
        balance_after = distributor.current_balance + signed

        entry = DistributorLedgerEntry.objects.create(
            distributor=distributor,
            entry_type=entry_type,
            order_type=order_type if entry_type == 'order' else '',
            order_id=order_id,
            amount=signed,
            balance_after=balance_after,
            payment_method=payment_method,
            reference=reference,
            description=description,
            notes=notes,
            created_by=created_by,
        )

        if entry_type == 'order':
            distributor.total_ordered += amount
        else:
            distributor.total_paid += amount
        distributor.current_balance = balance_after
        distributor.save(update_fields=['total_ordered', 'total_paid', 'current_balance', 'updated_at'])

        audit_logger.info(
            f"LEDGER_ENTRY distributor={distributor.pk} type={entry_type} amount={signed} "
            f"balance={balance_after} by={created_by.pk if created_by else 'system'}"
        )
        return entry

    @staticmethod
    def record_payment(distributor: Distributor, amount, payment_method: str, reference='',
                       notes='', created_by=None) -> DistributorLedgerEntry:
        if payment_method not in dict(DistributorLedgerEntry.PAYMENT_METHODS):
            raise ValidationFailed(f'Unknown payment method: {payment_method}')
        return LedgerService.add_entry(
            distributor, 'payment', amount,
            payment_method=payment_method,
            reference=reference,
            description=f"Payment received ({dict(DistributorLedgerEntry.PAYMENT_METHODS)[payment_method]})",
            notes=notes,
            created_by=created_by,
        )

    @staticmethod
    def ledger_page(distributor: Distributor, page: int, page_size: int) -> Dict:
        """Newest first, ``{entries, currentPage, totalPages, totalEntries}``"""
        entries = DistributorLedgerEntry.objects.filter(distributor=distributor).select_related('created_by')
        total = entries.count()
        total_pages = (total + page_size - 1) // page_size if total else 0
        offset = (page - 1) * page_size
        return {
            'entries': list(entries.order_by('-id')[offset:offset + page_size]),
            'currentPage': page,
            'totalPages': total_pages,
            'totalEntries': total,
        }

    @staticmethod
    def _rebalance(distributor: Distributor) -> Distributor:
        """Recompute every balance_after and the totals from the entries; caller holds the lock"""
        running = ZERO
        ordered = ZERO
        paid = ZERO
        for entry in distributor.ledger_entries.order_by('id'):
            running += entry.amount
            if entry.amount >= 0:
                ordered += entry.amount
            else:
                paid += -entry.amount
            if entry.balance_after != running:
                entry.balance_after = running
                entry.save(update_fields=['balance_after'])

        distributor.total_ordered = ordered
        distributor.total_paid = paid
        distributor.current_balance = running
        distributor.save(update_fields=['total_ordered', 'total_paid', 'current_balance', 'updated_at'])
        return distributor

    @staticmethod
    @transaction.atomic
    def remove_order_entry(distributor: Distributor, order_type: str, order_id: int) -> int:
        """
        Delete the ledger entry of an order and rebalance every later entry.

        Returns the number of entries removed.
        """
        distributor = LedgerService._lock(distributor)
        deleted, _ = DistributorLedgerEntry.objects.filter(
            distributor=distributor, entry_type='order', order_type=order_type, order_id=order_id
        ).delete()
        if deleted:
            LedgerService._rebalance(distributor)
            audit_logger.info(
                f"LEDGER_ENTRY_REMOVED distributor={distributor.pk} order_type={order_type} order={order_id}"
            )
        return deleted

    @staticmethod
    @transaction.atomic
    def update_order_amount(distributor: Distributor, order_type: str, order_id: int, amount) -> bool:
        """Change an order entry's amount after repricing and rebalance"""
        distributor = LedgerService._lock(distributor)
        amount = money(amount)
        entry = DistributorLedgerEntry.objects.filter(
            distributor=distributor, entry_type='order', order_type=order_type, order_id=order_id
        ).first()
        if entry is None or entry.amount == amount:
            return False
        previous = entry.amount
        entry.amount = amount
        entry.save(update_fields=['amount'])
        LedgerService._rebalance(distributor)
        audit_logger.info(
            f"LEDGER_ENTRY_REPRICED distributor={distributor.pk} order={order_id} {previous}->{amount}"
        )
        return True

    @staticmethod
    def check_consistency(distributor: Distributor) -> Dict:
        """Compare stored balances with those implied by the entries"""
        running = ZERO
        ordered = ZERO
        paid = ZERO
        bad_entries = []
        for entry in distributor.ledger_entries.order_by('id'):
            running += entry.amount
            if entry.amount >= 0:
                ordered += entry.amount
            else:
                paid += -entry.amount
            if entry.balance_after != running:
                bad_entries.append(entry.pk)

        return {
            'distributor_id': distributor.pk,
            'expected_balance': running,
            'stored_balance': distributor.current_balance,
            'expected_total_ordered': ordered,
            'expected_total_paid': paid,
            'mismatched_entries': bad_entries,
            'consistent': (
                not bad_entries
                and running == distributor.current_balance
                and ordered == distributor.total_ordered
                and paid == distributor.total_paid
            ),
        }

    @staticmethod
    @transaction.atomic
    def reconcile(distributor: Distributor) -> Distributor:
        distributor = LedgerService._lock(distributor)
        return LedgerService._rebalance(distributor)
