"""
URL configuration for market_server project.

App url modules carry their own resource prefix so collection endpoints
resolve without a trailing slash (``/api/cart``, ``/api/cart/clear``).
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/users/', include('apps.users.urls')),
    path('api/admin/', include('apps.users.admin_urls')),
    path('api/admin/', include('apps.products.admin_urls')),
    path('api/admin/', include('apps.distributors.admin_urls')),
    path('api/admin/', include('apps.content.admin_urls')),
    path('api/seller/', include('apps.products.seller_urls')),
    path('api/razorpay/', include('apps.payments.urls')),
    path('api/', include('apps.products.urls')),
    path('api/', include('apps.products.category_urls')),
    path('api/', include('apps.cart.urls')),
    path('api/', include('apps.orders.urls')),
    path('api/', include('apps.returns.urls')),
    path('api/', include('apps.distributors.urls')),
    path('api/', include('apps.distributors.bulk_urls')),
    path('api/', include('apps.rewards.urls')),
    path('api/', include('apps.notifications.urls')),
    path('api/', include('apps.content.urls')),
    path('api/', include('apps.common.urls')),
    # OpenAPI documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/schema/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),
]

# Serve uploaded media in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
