"""
Distributor models module.

All models are exported from this module to maintain backward compatibility.
"""
from .distributor import Distributor
from .ledger import DistributorLedgerEntry
from .bulk import BulkItem, BulkOrder, BulkOrderItem

__all__ = [
    'Distributor',
    'DistributorLedgerEntry',
    'BulkItem',
    'BulkOrder',
    'BulkOrderItem',
]
