from django.urls import path
from . import views

app_name = 'cart'

urlpatterns = [
    path('cart', views.CartView.as_view(), name='cart'),
    path('cart/clear', views.CartClearView.as_view(), name='clear'),
    path('cart/merge', views.CartMergeView.as_view(), name='merge'),
    path('cart/<int:item_id>', views.CartItemView.as_view(), name='item'),
]
