from django.urls import path
from .views import AddressListView, AddressDetailView, AddressAllView

urlpatterns = [
    path("", AddressListView.as_view(), name="api-addresses-list"),
    path("all/", AddressAllView.as_view(), name="api-addresses-all"),
    path("<int:address_id>/", AddressDetailView.as_view(), name="api-addresses-detail"),
]
