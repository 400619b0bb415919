from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from . import views

router = DefaultRouter(trailing_slash=False)
router.register(r'addresses', views.AddressViewSet, basename='address')

urlpatterns = [
    path('register', views.RegisterView.as_view(), name='register'),
    path('login', views.LoginView.as_view(), name='login'),
    path('token/refresh', TokenRefreshView.as_view(), name='token-refresh'),
    path('me', views.MeView.as_view(), name='me'),
    path('', include(router.urls)),
]
