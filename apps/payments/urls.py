from django.urls import path
from . import views

urlpatterns = [
    path('key', views.get_razorpay_key, name='razorpay-key'),
    path('create-order', views.create_razorpay_order, name='razorpay-create-order'),
    path('verify-payment', views.verify_razorpay_payment, name='razorpay-verify-payment'),
    path('payments', views.list_my_payments, name='razorpay-payments'),
]
