"""
URL configuration for djrobokassa app.
"""

from django.urls import path
from . import views

urlpatterns = [
    path('callback/result/', views.result_callback, name='robokassa_result'),
    path('callback/success/', views.success_callback, name='robokassa_success'),
    path('callback/fail/', views.fail_callback, name='robokassa_fail'),
]
