from dataclasses import dataclass
from typing import List, Optional

from .models import User, Address


@dataclass
class AddressDTO:
    id: int
    user_id: int
    street: str
    building_name: str
    city: str
    state: str
    country: str
    zipcode: str


@dataclass
class UserDTO:
    id: int
    username: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[str]
    is_staff: bool
    addresses: List[AddressDTO]


def address_to_dto(a: Address) -> AddressDTO:
    return AddressDTO(
        id=a.id,
        user_id=a.user_id,
        street=a.street,
        building_name=a.building_name,
        city=a.city,
        state=a.state,
        country=a.country,
        zipcode=a.zipcode,
    )


def user_to_dto(u: User) -> UserDTO:
    return UserDTO(
        id=u.id,
        username=u.username,
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        phone=u.phone,
        is_staff=bool(u.is_staff),
        addresses=[address_to_dto(a) for a in u.addresses.all()],
    )
