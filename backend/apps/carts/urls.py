from django.urls import path
from .views import CartListView, UserCartView, CartItemAddView, CartItemDeleteView

urlpatterns = [
    path("", CartListView.as_view(), name="api-carts-list"),
    path("users/cart/", UserCartView.as_view(), name="api-carts-mine"),
    path(
        "products/<int:product_id>/quantity/<int:quantity>/",
        CartItemAddView.as_view(),
        name="api-carts-add-item",
    ),
    path("product/<int:product_id>/", CartItemDeleteView.as_view(), name="api-carts-remove-item"),
]
