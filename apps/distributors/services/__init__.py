"""
Distributor services module.

All services are exported from this module to maintain backward compatibility.
"""
from .ledger_service import LedgerService
from .distributor_service import DistributorService
from .bulk_order_service import BulkOrderService

__all__ = [
    'LedgerService',
    'DistributorService',
    'BulkOrderService',
]
