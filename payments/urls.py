from django.urls import path
from payments import views

urlpatterns = [
    path('order/', views.create_order, name='razorpay_create_order'),
    path('verify/', views.verify_payment, name='razorpay_verify_payment'),
]
