from django.urls import path, include
from apps.carts.views import CartItemQuantityView

urlpatterns = [
    path("auth/", include("apps.auth.urls")),
    path("", include("apps.catalog.urls")),
    path("addresses/", include("apps.users.urls")),
    path("carts/", include("apps.carts.urls")),
    # Quantity adjustments live under the singular prefix
    path(
        "cart/products/<int:product_id>/quantity/<str:operation>/",
        CartItemQuantityView.as_view(),
        name="api-cart-item-quantity",
    ),
    path("orders/", include("apps.orders.urls")),
]
