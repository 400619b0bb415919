"""
Distributor views module.

All views are exported from this module to maintain backward compatibility.
"""
from .distributor_views import (
    DistributorListView, DistributorDetailView, DistributorByUserView, MyDistributorView,
    DistributorLedgerView, DistributorPaymentView, DistributorStatsView,
)
from .bulk_views import AvailableBulkItemsView, DistributorBulkOrderListView, DistributorBulkOrderDetailView
from .bulk_admin_views import (
    BulkProductSearchView, BulkItemListView, BulkItemDetailView,
    AdminBulkOrderListView, AdminBulkOrderDetailView, BulkOrderStatsView,
)

__all__ = [
    'DistributorListView',
    'DistributorDetailView',
    'DistributorByUserView',
    'MyDistributorView',
    'DistributorLedgerView',
    'DistributorPaymentView',
    'DistributorStatsView',
    'AvailableBulkItemsView',
    'DistributorBulkOrderListView',
    'DistributorBulkOrderDetailView',
    'BulkProductSearchView',
    'BulkItemListView',
    'BulkItemDetailView',
    'AdminBulkOrderListView',
    'AdminBulkOrderDetailView',
    'BulkOrderStatsView',
]
