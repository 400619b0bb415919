"""
Distributor serializers module.

All serializers are exported from this module to maintain backward compatibility.
"""
from .distributor_serializers import (
    DistributorSerializer, DistributorCreateSerializer, DistributorUpdateSerializer,
    LedgerEntrySerializer, PaymentEntrySerializer,
)
from .bulk_serializers import (
    BulkItemSerializer, BulkItemWriteSerializer, BulkProductSearchSerializer,
    BulkOrderItemSerializer, BulkOrderListSerializer, BulkOrderSerializer,
    BulkOrderCreateSerializer, BulkOrderUpdateSerializer,
)

__all__ = [
    'DistributorSerializer',
    'DistributorCreateSerializer',
    'DistributorUpdateSerializer',
    'LedgerEntrySerializer',
    'PaymentEntrySerializer',
    'BulkItemSerializer',
    'BulkItemWriteSerializer',
    'BulkProductSearchSerializer',
    'BulkOrderItemSerializer',
    'BulkOrderListSerializer',
    'BulkOrderSerializer',
    'BulkOrderCreateSerializer',
    'BulkOrderUpdateSerializer',
]
