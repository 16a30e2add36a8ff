from __future__ import annotations

from typing import Any, Dict, List, Optional, Type

from django.db import transaction
from rest_framework.response import Response

from apps.common import get_logger
from apps.common.pagination import StandardPagination, resolve_ordering
from .dtos import AddressDTO, address_to_dto
from .exceptions import AddressNotFound
from .protocols import AddressRepositoryProtocol

logger = get_logger(__name__).bind(component="users", layer="service")

ADDRESS_FIELDS = ("street", "building_name", "city", "state", "country", "zipcode")

ADDRESS_SORT_FIELDS = {
    "addressId": "id",
    "street": "street",
    "buildingName": "building_name",
    "city": "city",
    "state": "state",
    "country": "country",
    "zipcode": "zipcode",
}


class AddressService:
    def __init__(self, addresses: AddressRepositoryProtocol):
        self.addresses = addresses
        self.logger = logger.bind(service="AddressService")

    def list_addresses(self, user_id: int) -> List[AddressDTO]:
        self.logger.debug("Listing addresses", user_id=user_id)
        return [address_to_dto(a) for a in self.addresses.list_for_user(user_id)]

    def create_address(self, user_id: int, data: Dict[str, Any]) -> AddressDTO:
        payload = {field: data[field] for field in ADDRESS_FIELDS}
        with transaction.atomic():
            address = self.addresses.create(user_id=user_id, **payload)
        self.logger.info("Address created", user_id=user_id, address_id=address.id)
        return address_to_dto(address)

    def _get_owned(self, user_id: int, address_id: int):
        address = self.addresses.get(id=address_id, user_id=user_id)
        if address is None:
            self.logger.warning(
                "Address lookup failed",
                user_id=user_id,
                address_id=address_id,
                code=AddressNotFound.code,
            )
            raise AddressNotFound(details={"addressId": str(address_id)})
        return address

    def get_address(self, user_id: int, address_id: int) -> AddressDTO:
        """Return one of the user's addresses; other users' addresses count as missing."""
        self.logger.debug("Fetching address", user_id=user_id, address_id=address_id)
        return address_to_dto(self._get_owned(user_id, address_id))

    def delete_address(self, user_id: int, address_id: int) -> None:
        with transaction.atomic():
            address = self._get_owned(user_id, address_id)
            self.addresses.delete(address)
        self.logger.info("Address deleted", user_id=user_id, address_id=address_id)

    def list_all_addresses(
        self,
        request,
        *,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
        paginator_class: Type[StandardPagination] = StandardPagination,
        serializer_class=None,
        view=None,
    ) -> Response:
        ordering = resolve_ordering(sort_by, sort_order, ADDRESS_SORT_FIELDS, "id")
        self.logger.debug("Listing all addresses", ordering=ordering)
        queryset = self.addresses.list_ordered(ordering)
        paginator = paginator_class()
        page = paginator.paginate_queryset(queryset, request, view=view)
        if serializer_class is None:
            from .serializers import AddressSerializer

            serializer_class = AddressSerializer
        data = serializer_class([address_to_dto(a) for a in page], many=True).data
        return paginator.get_paginated_response(data)
