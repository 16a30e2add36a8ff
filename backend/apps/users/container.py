from __future__ import annotations

from .repositories import AddressRepository
from .services import AddressService


def build_address_service() -> AddressService:
    return AddressService(addresses=AddressRepository())
