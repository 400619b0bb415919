from django.urls import path
from . import views

urlpatterns = [
    path('distributors', views.DistributorListView.as_view(), name='distributor-list'),
    path('distributors/me', views.MyDistributorView.as_view(), name='distributor-me'),
    path('distributors/user/<int:user_id>', views.DistributorByUserView.as_view(), name='distributor-by-user'),
    path('distributors/<int:distributor_id>', views.DistributorDetailView.as_view(), name='distributor-detail'),
    path('distributors/<int:distributor_id>/ledger', views.DistributorLedgerView.as_view(), name='distributor-ledger'),
    path('distributors/<int:distributor_id>/payments', views.DistributorPaymentView.as_view(), name='distributor-payments'),
    path('distributors/<int:distributor_id>/stats', views.DistributorStatsView.as_view(), name='distributor-stats'),
]
