from django.urls import path

from . import views

urlpatterns = [
    path('users', views.AdminUserListView.as_view(), name='admin-users'),
    path('users/<int:user_id>', views.AdminUserDetailView.as_view(), name='admin-user-detail'),
    path('users/<int:user_id>/role', views.AdminUserRoleView.as_view(), name='admin-user-role'),
    path('co-admins', views.CoAdminListView.as_view(), name='admin-co-admins'),
    path('co-admins/<int:user_id>/permissions', views.CoAdminPermissionsView.as_view(), name='admin-co-admin-permissions'),
    path('sellers', views.SellerListView.as_view(), name='admin-sellers'),
    path('sellers/<int:user_id>/approve', views.SellerApproveView.as_view(), name='admin-seller-approve'),
    path('sellers/<int:user_id>/reject', views.SellerRejectView.as_view(), name='admin-seller-reject'),
]
