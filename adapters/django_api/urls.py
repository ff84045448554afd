"""
Storefront Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("cart/price", views.cart_price_view),
    path("cart/order-summary", views.order_summary_view),
    path("products/best-offer", views.best_offer_view),
    path("delivery-areas", views.delivery_areas_view),
]
